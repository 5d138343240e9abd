def bind(runtime):

    class LogEvent:
        """
        Declared at contract top level, called with a dict of event data:

            Transfer = LogEvent('Transfer')
            Transfer({'from': None, 'to': to, 'token_id': token_id})
        """
        def __init__(self, event):
            assert isinstance(event, str) and event != '', 'Event name must be a non-empty string.'
            self.event = event

        def __call__(self, data):
            assert isinstance(data, dict), 'Event data must be a dict.'

            runtime.events.append({
                'contract': runtime.context.this,
                'event': self.event,
                'signer': runtime.context.signer,
                'caller': runtime.context.caller,
                'data': dict(data)
            })

    return {
        'LogEvent': LogEvent
    }
