import ast
import astor

from tokencap import config
from tokencap.exceptions import CompilationException
from tokencap.compilation.linter import Linter


def privatize(name):
    return '{}{}'.format(config.PRIVATE_METHOD_PREFIX, name)


class ContractingCompiler(ast.NodeTransformer):
    """
    Rewrites linted contract source into what is stored and executed:

    - undecorated functions, and every reference to them, get the private prefix
    - the ``@construct`` function becomes ``____`` so it only ever runs at submission
    - ``@export`` is dropped
    - ``Variable()`` / ``Hash()`` declarations are bound to their contract and name
    """
    def __init__(self, module_name='__main__', linter=None):
        self.module_name = module_name
        self.linter = linter or Linter()
        self._private = set()

    def parse(self, source: str, lint=True):
        tree = ast.parse(source)

        if lint:
            violations = self.linter.check(tree)
            if violations is not None:
                raise CompilationException(violations)

        self._private = {node.name for node in ast.walk(tree)
                         if isinstance(node, ast.FunctionDef) and not node.decorator_list}
        try:
            tree = self.visit(tree)
        finally:
            self._private = set()

        return ast.fix_missing_locations(tree)

    def parse_to_code(self, source, lint=True):
        return astor.to_source(self.parse(source, lint=lint))

    def visit_FunctionDef(self, node):
        if not node.decorator_list:
            node.name = privatize(node.name)
        elif node.decorator_list.pop().id == config.INIT_DECORATOR_STRING:
            node.name = config.INIT_FUNC_NAME

        self.generic_visit(node)
        return node

    def visit_Assign(self, node):
        value = node.value
        if isinstance(value, ast.Call) and isinstance(value.func, ast.Name) and \
                value.func.id in config.ORM_CLASS_NAMES:
            value.keywords += [
                ast.keyword(arg='contract', value=ast.Constant(value=self.module_name)),
                ast.keyword(arg='name', value=ast.Constant(value=node.targets[0].id)),
            ]
            return node

        self.generic_visit(node)
        return node

    def visit_Name(self, node):
        if node.id in self._private:
            node.id = privatize(node.id)
        return node
