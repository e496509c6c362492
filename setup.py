"""
Build script for enml.

Set ENML_USE_MYPYC=1 to compile the per-event modules with mypyc:

    ENML_USE_MYPYC=1 pip install .[mypyc]
"""

import os

from setuptools import find_packages, setup

# tokenizer.py stays interpreted, lxml introspects its target methods
MYPYC_MODULES = [
    "src/enml/writer.py",
    "src/enml/render.py",
    "src/enml/todos.py",
]


def extension_modules():
    if os.environ.get("ENML_USE_MYPYC", "0") != "1":
        return []
    from mypyc.build import mypycify

    return mypycify(MYPYC_MODULES, opt_level=os.environ.get("MYPYC_OPT_LEVEL", "3"))


if __name__ == "__main__":
    setup(
        name="enml",
        version="0.1.0",
        description="Convert ENML notes to HTML, list and toggle their checklist items",
        python_requires=">=3.10",
        package_dir={"": "src"},
        packages=find_packages("src"),
        install_requires=["lxml>=4.4"],
        extras_require={
            "test": ["pytest"],
            "mypyc": ["mypy"],
        },
        entry_points={"console_scripts": ["enml = enml.__main__:main"]},
        ext_modules=extension_modules(),
    )
