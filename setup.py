# setup.py
from setuptools import setup, find_packages

setup(
    name="alone",
    version="0.1.0",
    description="A small S-expression interpreter with a language server",
    packages=find_packages(include=["alone", "alone.*", "alone_lsp", "alone_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.0,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "alone=alone.__main__:main",
            "alone-ls=alone_lsp.server:main",
            "alone-repl-server=alone_lsp.repl_server:main",
        ],
    },
    zip_safe=False,
)
