# ruff: noqa: F401
from pliscan.io.csv import CSVWriter
