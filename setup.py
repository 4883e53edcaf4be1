"""
Setup.py for uniqr.
"""

import ast
import os

from setuptools import setup

INSTALL_REQUIREMENTS = []
TEST_REQUIREMENTS = [
    "pytest",
    "flake8>=3.7.9",
]


ROOT_DIR = os.path.dirname(os.path.abspath(__file__))
CORE_PATH = os.path.join(ROOT_DIR, "uniqr", "core.py")


def get_uniqr_version(corepath):
    """
    Find and return the current uniqr version.
    :param corepath: path to the 'core.py' file of the uniqr package
    :type corepath: str
    :return: the uniqr version defined in the corepath
    :rtype: str
    """
    with open(corepath, "r") as fin:
        for line in fin:
            if line.startswith("__version__"):
                version = ast.literal_eval(line.split("=")[1].strip())
                return version
    raise Exception("Could not find uniqr version in file '{f}'".format(f=corepath))


setup(
    name="uniqr",
    version=get_uniqr_version(CORE_PATH),
    description="Filter adjacent repeated lines",
    packages=[
        "uniqr",
        "uniqr.bin",
        "uniqr.lib",
    ],
    scripts=["launch_uniqr.py"],
    zip_safe=False,
    install_requires=INSTALL_REQUIREMENTS,
    extras_require={
        "testing": TEST_REQUIREMENTS,
    },
)
