class ContractingError(Exception):
    """
    The base exception for the contract engine. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class ContractExists(ContractingError):
    """
    When attempting to set a contract, found that it
    already exists in the database

    :ivar contract_name: The name of the contract
                         submitted.
    """
    fmt = "Contract with name '{contract_name}' already exists in the database"


class ContractNotFound(ContractingError):
    fmt = "Contract with name '{contract_name}' does not exist"


class CompilationException(Exception):
    def __init__(self, violations):
        super().__init__('\n'.join(violations))
        self.violations = violations


class TokenError(ContractingError):
    """
    Base rejection raised from inside token contracts. The message is
    the revert reason surfaced to the caller.
    """
    fmt = 'Token operation rejected'


class SupplyExceeded(TokenError):
    """
    :ivar max_supply: The immutable issuance ceiling
    """
    fmt = 'All NFTs have been minted'


class NonexistentToken(TokenError):
    """
    :ivar query: What was being looked up (owner, URI, operator...)
    :ivar token_id: The missing token
    """
    fmt = 'ERC721: {query} query for nonexistent token'


class NotAuthorized(TokenError):
    """
    :ivar action: The attempted action (transfer, approve)
    """
    fmt = 'ERC721: {action} caller is not owner nor approved'


class IncorrectOwner(NotAuthorized):
    fmt = 'ERC721: transfer from incorrect owner'


class NotOwner(TokenError):
    fmt = 'You do not own this token'


class ZeroAddress(TokenError):
    fmt = 'ERC721: {action} the zero address'


class InvalidAddress(TokenError):
    """
    Addresses are stored as state key parts, so they must be strings free of
    the key delimiter ':' and index separator '.'.

    :ivar address: The rejected address
    """
    fmt = "Invalid address '{address}'"


# Error types that contract code may raise by name
TOKEN_ERRORS = {
    cls.__name__: cls for cls in (
        TokenError,
        SupplyExceeded,
        NonexistentToken,
        NotAuthorized,
        IncorrectOwner,
        NotOwner,
        ZeroAddress,
        InvalidAddress,
    )
}


class NotContractOwner(ContractingError):
    fmt = "Caller {caller} is not the owner {owner}!"


class FunctionNotFound(ContractingError):
    fmt = "Contract '{contract_name}' has no exported function '{function_name}'"
