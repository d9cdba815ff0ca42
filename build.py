"""
Build script for creating a standalone executable using PyInstaller.

This script bundles the CLI application and its dependencies into a single
executable named `drop`.
"""

import PyInstaller.__main__  # type: ignore

PyInstaller.__main__.run(
    [
        "main.py",
        "--onefile",
        "--name=drop",
        # inquirer loads its themes lazily
        "--collect-submodules=inquirer",
    ]
)
