"""
Pre-funded account tables and test credentials for block zero.
"""
from linkgenesis.core.alloc.alloc import TestAccount, TEST_ACCOUNTS, TEST_ALLOC_BALANCE, \
    WELL_KNOWN_TEST_ADDRESSES, get_alloc_accounts, get_test_accounts, get_test_alloc_accounts, \
    write_test_keystores

__all__ = [
    "TestAccount",
    "TEST_ACCOUNTS",
    "TEST_ALLOC_BALANCE",
    "WELL_KNOWN_TEST_ADDRESSES",
    "get_alloc_accounts",
    "get_test_accounts",
    "get_test_alloc_accounts",
    "write_test_keystores"
]
