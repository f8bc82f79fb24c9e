"""Decide whether an import path points at production source code."""
import re


# Test runners, assertion and mocking libraries (case-sensitive)
TEST_LIBRARY_PATTERNS = [
    re.compile(pattern) for pattern in (
        r'^vitest$',
        r'^@vitest/',
        r'^jest$',
        r'^@jest/',
        r'^@testing-library/',
        r'^react-test-renderer',
        r'^enzyme',
        r'^sinon',
        r'^chai',
        r'^mocha',
        r'^node:test',
        r'^assert$',
    )
]

# Test doubles and shared test scaffolding (case-insensitive)
MOCK_FIXTURE_PATTERNS = [
    re.compile(r'mock', re.IGNORECASE),
    re.compile(r'fixture', re.IGNORECASE),
    re.compile(r'stub', re.IGNORECASE),
    re.compile(r'fake', re.IGNORECASE),
    re.compile(r'__mocks__'),
    re.compile(r'__fixtures__'),
    re.compile(r'test-utils?', re.IGNORECASE),
    re.compile(r'test-helper', re.IGNORECASE),
]

BUILTIN_PREFIXES = ('node:',)

RELATIVE_PREFIXES = ('./', '../')


def is_source_module(module_path: str) -> bool:
    """Return True if ``module_path`` is a relative import of project code.

    Bare and absolute specifiers are never treated as source: without
    filesystem access they cannot be told apart from third-party
    packages.
    """
    if any(pattern.search(module_path) for pattern in TEST_LIBRARY_PATTERNS):
        return False

    if any(pattern.search(module_path) for pattern in MOCK_FIXTURE_PATTERNS):
        return False

    if module_path.startswith(BUILTIN_PREFIXES):
        return False

    return module_path.startswith(RELATIVE_PREFIXES)
