class Context:
    """
    Exposed to contract code as ``ctx``. Only one contract runs per call, so
    the caller and the signer are always the account that sent it.
    """
    FIELDS = ('this', 'caller', 'signer', 'owner')

    def __init__(self):
        self._state = dict.fromkeys(self.FIELDS)

    def _enter(self, sender, contract_name, owner=None):
        self._state = {
            'this': contract_name,
            'caller': sender,
            'signer': sender,
            'owner': owner
        }

    def _leave(self):
        self._state = dict.fromkeys(self.FIELDS)

    @property
    def this(self):
        return self._state['this']

    @property
    def caller(self):
        return self._state['caller']

    @property
    def signer(self):
        return self._state['signer']

    @property
    def owner(self):
        return self._state['owner']


class Runtime:
    """
    Per-executor execution state: the caller context, the driver contract code
    reads and writes through, and the events emitted by the running call.
    """
    def __init__(self, driver):
        self.driver = driver
        self.context = Context()
        self.env = {}
        self.events = []

    def set_up(self, sender, contract_name, owner=None, environment=None):
        self.context._enter(sender, contract_name, owner)
        self.env = dict(environment or {})
        self.events = []

    def clean_up(self):
        self.context._leave()
        self.env = {}
        self.events = []
