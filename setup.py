from setuptools import setup, find_packages

setup(
    name="record-validator",
    version="0.1.0",
    description="Declarative field constraint validation for dataclass records",
    author="Jude Payne",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        'record_validator': ['validator-config.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'pyyaml>=6.0',
        'jsonschema>=4.17.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'record-validator-rpc=record_validator.jsonrpc_server:main',
        ],
    },
    python_requires='>=3.9',
)
