# coding: utf-8
"""
Launch the uniq command of uniqr.
"""
import sys

from uniqr.bin.uniq import main

main(sys.argv[1:])
