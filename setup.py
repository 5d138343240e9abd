from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'astor==0.8.1',
    'autopep8>=1.5.7',
    'stdlib_list>=0.10.0',
    'coloredlogs',
]

setup(
    name='tokencap',
    version=__version__,
    description='Capped non-fungible token registry written as a Python smart contract, with its contract engine.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.9',
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=False,
    include_package_data=True,
    package_data={
        'tokencap.contracts': ['*.s.py'],
    },
)
