owners = Hash()
uris = Hash()
approvals = Hash()
operators = Hash(default_value=False)
balances = Hash(default_value=0)

supply_cap = Variable()
minted = Variable()
burned = Variable()

Transfer = LogEvent('Transfer')
Approval = LogEvent('Approval')
ApprovalForAll = LogEvent('ApprovalForAll')


@construct
def seed(supply: int):
    assert isinstance(supply, int) and not isinstance(supply, bool) and supply > 0, \
        'Max supply must be a positive integer.'

    supply_cap.set(supply)
    minted.set(0)
    burned.set(0)


def require_format(address):
    if not isinstance(address, str) or ':' in address or '.' in address:
        raise InvalidAddress(address=address)


def require_address(address, action):
    if address is None or address == '':
        raise ZeroAddress(action=action)
    require_format(address)


def require_owner(token_id, query):
    if not isinstance(token_id, int):
        raise NonexistentToken(query=query, token_id=token_id)

    owner = owners[token_id]
    if owner is None:
        raise NonexistentToken(query=query, token_id=token_id)
    return owner


def is_approved_or_owner(spender, token_id):
    owner = require_owner(token_id, 'operator')

    return spender == owner or \
        approvals[token_id] == spender or \
        operators[owner, spender] is True


@export
def mint(to: str, uri: str):
    require_address(to, 'mint to')

    if minted.get() >= supply_cap.get():
        raise SupplyExceeded(max_supply=supply_cap.get())

    token_id = minted.get() + 1

    owners[token_id] = to
    uris[token_id] = uri
    balances[to] += 1
    minted.set(token_id)

    Transfer({'from': None, 'to': to, 'token_id': token_id})

    return token_id


@export
def owner_of(token_id: int):
    return require_owner(token_id, 'owner')


@export
def token_uri(token_id: int):
    require_owner(token_id, 'URI')
    return uris[token_id]


@export
def balance_of(owner: str):
    require_address(owner, 'balance query for')
    return balances[owner]


@export
def transfer_from(sender: str, to: str, token_id: int):
    if not is_approved_or_owner(ctx.caller, token_id):
        raise NotAuthorized(action='transfer')

    if owners[token_id] != sender:
        raise IncorrectOwner(action='transfer')

    require_address(to, 'transfer to')

    approvals[token_id] = None

    balances[sender] -= 1
    balances[to] += 1
    owners[token_id] = to

    Transfer({'from': sender, 'to': to, 'token_id': token_id})


@export
def burn(token_id: int):
    owner = require_owner(token_id, 'owner')

    if owner != ctx.caller:
        raise NotOwner(token_id=token_id)

    approvals[token_id] = None
    uris[token_id] = None
    owners[token_id] = None

    balances[owner] -= 1
    burned.set(burned.get() + 1)

    Transfer({'from': owner, 'to': None, 'token_id': token_id})


@export
def approve(to: str, token_id: int):
    owner = require_owner(token_id, 'owner')

    assert to != owner, 'ERC721: approval to current owner'

    if ctx.caller != owner and operators[owner, ctx.caller] is not True:
        raise NotAuthorized(action='approve')

    if to is not None:
        require_format(to)

    approvals[token_id] = to

    Approval({'owner': owner, 'approved': to, 'token_id': token_id})


@export
def get_approved(token_id: int):
    require_owner(token_id, 'approved')
    return approvals[token_id]


@export
def set_approval_for_all(operator: str, approved: bool):
    assert operator != ctx.caller, 'ERC721: approve to caller'
    require_format(operator)
    require_format(ctx.caller)

    operators[ctx.caller, operator] = approved

    ApprovalForAll({'owner': ctx.caller, 'operator': operator, 'approved': approved})


@export
def is_approved_for_all(owner: str, operator: str):
    require_format(owner)
    require_format(operator)
    return operators[owner, operator]


@export
def max_supply():
    return supply_cap.get()


@export
def total_minted():
    return minted.get()


@export
def total_supply():
    return minted.get() - burned.get()
