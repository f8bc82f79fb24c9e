"""ESM import extraction for test files.

Collects the local bindings a test file pulls in from production modules:

    import { a, b as c } from './mod'   -> a, c
    import d from './mod'               -> d
    import * as ns from './mod'         -> ns

Imports from test libraries, mocks, fixtures and bare packages are dropped
(see import_classifier).
"""
import re
from typing import List

from .import_classifier import is_source_module
from .models import ImportedSymbol


NAMED_IMPORT = re.compile(r'''import\s*\{([^}]+)\}\s*from\s*['"]([^'"]+)['"]''')
DEFAULT_IMPORT = re.compile(r'''import\s+(\w+)\s+from\s*['"]([^'"]+)['"]''')
NAMESPACE_IMPORT = re.compile(r'''import\s*\*\s*as\s+(\w+)\s+from\s*['"]([^'"]+)['"]''')

ALIAS = re.compile(r'(\w+)\s+as\s+(\w+)')


def _named_bindings(clause: str) -> List[str]:
    """Split the inside of ``{ ... }`` into the names used in code."""
    names = []
    for specifier in clause.split(','):
        specifier = specifier.strip()
        if not specifier:
            continue

        alias = ALIAS.search(specifier)
        if alias:
            # The alias is what the test body refers to
            names.append(alias.group(2))
            continue

        name = re.sub(r'\s+', '', specifier)
        if name:
            names.append(name)
    return names


def extract_imports(content: str) -> List[ImportedSymbol]:
    """Extract imported symbols that come from production source modules.

    Each import statement contributes independently; the same name
    imported twice appears twice.
    """
    imports: List[ImportedSymbol] = []

    for match in NAMED_IMPORT.finditer(content):
        module_path = match.group(2)
        if not is_source_module(module_path):
            continue
        for name in _named_bindings(match.group(1)):
            imports.append(ImportedSymbol(name=name, module_path=module_path))

    for pattern in (DEFAULT_IMPORT, NAMESPACE_IMPORT):
        for match in pattern.finditer(content):
            name, module_path = match.group(1), match.group(2)
            if is_source_module(module_path):
                imports.append(ImportedSymbol(name=name, module_path=module_path))

    return imports
