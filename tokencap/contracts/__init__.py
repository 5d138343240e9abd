import os

CONTRACT_DIR = os.path.dirname(__file__)
CONTRACT_EXT = '.s.py'


def contract_path(name):
    return os.path.join(CONTRACT_DIR, '{}{}'.format(name, CONTRACT_EXT))


def contract_code(name):
    with open(contract_path(name)) as f:
        return f.read()
