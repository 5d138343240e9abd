from tokencap.db.orm import Variable, Hash


def bind(runtime):
    """ Returns ORM classes that read and write through the runtime's driver. """

    class V(Variable):
        def __init__(self, *args, **kwargs):
            kwargs['driver'] = runtime.driver
            super().__init__(*args, **kwargs)

    class H(Hash):
        def __init__(self, *args, **kwargs):
            kwargs['driver'] = runtime.driver
            super().__init__(*args, **kwargs)

    # Define the locals that will be available for smart contracts at runtime
    return {
        'Variable': V,
        'Hash': H
    }
