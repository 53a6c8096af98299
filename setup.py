# setup.py
from setuptools import setup, find_packages

setup(
    name="forsp",
    version="0.1.0",
    description="Interpreter for Forsp, a stack-based Lisp with first-class environments",
    packages=find_packages(include=["forsp", "forsp.*", "forsp_lsp", "forsp_lsp.*"]),
    package_data={"forsp": ["prelude/*.fp"]},
    python_requires=">=3.10",
    install_requires=[
        "pygls>=2.0",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "forsp=forsp.__main__:main",
            "forsp-ls=forsp_lsp.server:main",
            "forsp-repl-server=forsp_lsp.repl_server:main",
        ],
    },
    zip_safe=False,
)
