import ast
import sys

from .. import config

from ..logger import get_logger
from ..compilation.whitelists import ALLOWED_AST_TYPES, ALLOWED_ANNOTATION_TYPES, VIOLATION_TRIGGERS, ILLEGAL_BUILTINS

from stdlib_list import stdlib_list, short_versions

log = get_logger('Tokencap.Linter')


def _stdlib_version():
    current = '{}.{}'.format(sys.version_info.major, sys.version_info.minor)
    if current in short_versions:
        return current

    # Interpreter newer than the bundled lists; the closest known list is used
    return max(short_versions, key=lambda v: tuple(int(p) for p in v.split('.')))


def _name_of(node):
    if isinstance(node, ast.Name):
        return node.id
    return type(node).__name__


def _is_orm_declaration(node):
    call = node.value
    return isinstance(call, ast.Call) and isinstance(call.func, ast.Name) and call.func.id in config.ORM_CLASS_NAMES


class Linter(ast.NodeVisitor):
    """
    Walks a contract's syntax tree once and collects every rule it breaks.
    Some rules need the whole module first (an export exists, argument names do
    not shadow state, exported signatures are annotated), so those are checked
    after the walk.
    """

    def __init__(self):
        self.stdlib_modules = set(stdlib_list(_stdlib_version()))
        self._reset()

    def _reset(self):
        self._violations = []
        self._has_export = False
        self._has_constructor = False
        self._state_names = set()
        self._arg_names = set()
        self._export_arg_types = set()
        self._export_returns = set()

    def _violation(self, lnum, trigger, detail=None):
        message = "Line {}: {}".format(lnum, VIOLATION_TRIGGERS[trigger])
        if detail is not None:
            message += " : {}".format(detail)
        self._violations.append(message)

    def visit(self, node):
        self.ast_types(node, getattr(node, 'lineno', 0))
        return super().visit(node)

    def ast_types(self, t, lnum):
        if type(t) not in ALLOWED_AST_TYPES:
            self._violation(lnum, 0, type(t).__name__)

    def not_system_variable(self, v, lnum):
        if v.startswith('_'):
            self._violation(lnum, 1, v)

    def visit_Name(self, node):
        self.not_system_variable(node.id, node.lineno)
        self.generic_visit(node)

    def visit_Attribute(self, node):
        self.not_system_variable(node.attr, node.lineno)
        self.generic_visit(node)

    def visit_Import(self, node):
        # Contracts are self-contained; the standard library is off limits and nothing else exists
        for alias in node.names:
            if alias.name.split('.')[0] in self.stdlib_modules:
                self._violation(node.lineno, 13, alias.name)
            else:
                self._violation(node.lineno, 4, alias.name)

    def visit_ImportFrom(self, node):
        self._violation(node.lineno, 3)

    def visit_ClassDef(self, node):
        self._violation(node.lineno, 5)
        self.generic_visit(node)

    def visit_AsyncFunctionDef(self, node):
        self._violation(node.lineno, 6)
        self.generic_visit(node)

    def visit_Assign(self, node):
        if _is_orm_declaration(node):
            if {'contract', 'name'} & {k.arg for k in node.value.keywords}:
                self._violation(node.lineno, 10)

            target = node.targets[0]
            if len(node.targets) == 1 and isinstance(target, ast.Name):
                self._state_names.add(target.id)
            else:
                self._violation(node.lineno, 11)

        self.generic_visit(node)

    def visit_Call(self, node):
        if isinstance(node.func, ast.Name) and node.func.id in ILLEGAL_BUILTINS:
            self._violation(node.lineno, 13, node.func.id)

        self.generic_visit(node)

    def _check_decorators(self, node):
        if len(node.decorator_list) > 1:
            self._violation(node.lineno, 9, "Detected: {} MAX limit: 1".format(len(node.decorator_list)))

        exported = False
        for decorator in node.decorator_list:
            name = _name_of(decorator)

            if name not in config.VALID_DECORATORS:
                self._violation(node.lineno, 7, "valid list: {}".format(sorted(config.VALID_DECORATORS)))
            elif name == config.EXPORT_DECORATOR_STRING:
                exported = True
            elif self._has_constructor:
                self._violation(node.lineno, 8)
            else:
                self._has_constructor = True

        return exported

    def visit_FunctionDef(self, node):
        for child in node.body:
            if isinstance(child, (ast.Import, ast.ImportFrom)):
                self._violation(node.lineno, 2)

        exported = self._check_decorators(node)
        self._has_export = self._has_export or exported

        for a in node.args.args:
            self._arg_names.add((a.arg, node.lineno))
            if exported:
                annotation = None if a.annotation is None else _name_of(a.annotation)
                self._export_arg_types.add((annotation, node.lineno))

        if exported and node.returns is not None:
            self._export_returns.add((_name_of(node.returns), node.lineno))

        # Annotations run when the function is defined, so they are linted like
        # any other expression. Decorators were checked by name above.
        self.visit(node.args)
        if node.returns is not None:
            self.visit(node.returns)
        for child in node.body:
            self.visit(child)

    def visit_arg(self, node):
        self.not_system_variable(node.arg, node.lineno)
        if node.annotation is not None:
            self.visit(node.annotation)

    def _module_checks(self):
        for name, lineno in sorted(self._arg_names):
            if name in self._state_names:
                self._violation(lineno, 14, name)

        if not self._has_export:
            self._violation(0, 12)

        for annotation, lineno in sorted(self._export_arg_types, key=lambda x: (x[1], str(x[0]))):
            if annotation is None:
                self._violation(lineno, 16)
            elif annotation not in ALLOWED_ANNOTATION_TYPES:
                self._violation(lineno, 15, annotation)

        for annotation, lineno in sorted(self._export_returns, key=lambda x: (x[1], str(x[0]))):
            self._violation(lineno, 17, annotation)

    def check(self, ast_tree):
        self._reset()
        self.visit(ast_tree)
        self._module_checks()

        if self._violations:
            log.debug('Lint failed with {} violations'.format(len(self._violations)))
            return self._violations
        return None
