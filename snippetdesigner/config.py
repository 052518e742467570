"""
Snippet Designer Configuration Constants

This module centralizes the fixed names used when resolving snippet
directories: configuration store sections, supported languages and the
directory layout under the user's data root.
"""

from dataclasses import dataclass

# ============================================================
# Configuration Store Layout
# ============================================================

# Section holding one sub-section per snippet language
CODE_EXPANSIONS_SECTION: str = "Languages\\CodeExpansions"

# Per-language sub-sections, read in this order
FORCE_CREATE_DIRS_SECTION: str = "ForceCreateDirs"
PATHS_SECTION: str = "Paths"

# Separator for several directories packed into one value
PATH_LIST_SEPARATOR: str = ";"

# Default registry key of the host IDE (under HKEY_LOCAL_MACHINE)
DEFAULT_REGISTRY_KEY: str = "SOFTWARE\\Microsoft\\VisualStudio\\9.0"

# ============================================================
# Locale
# ============================================================

# en-US, used when neither the host nor the process locale yields an LCID
DEFAULT_LCID: int = 1033

# ============================================================
# User Snippet Directories
# ============================================================

# Directory under the user data root holding all user snippets
SNIPPET_DIRECTORY_NAME: str = "Code Snippets"

MY_SNIPPETS_DIR: str = "My Code Snippets"
MY_XML_SNIPPETS_DIR: str = "My Xml Snippets"

# Label of the snippet root entry in the user directory map
ROOT_LABEL: str = ""


@dataclass(frozen=True)
class SnippetLanguage:
    """A language the snippet designer saves and discovers snippets for."""

    store_key: str  # Sub-section name under CODE_EXPANSIONS_SECTION
    display_name: str
    directory_name: str  # Directory under SNIPPET_DIRECTORY_NAME
    my_snippets_dir: str


SNIPPET_LANGUAGES: tuple[SnippetLanguage, ...] = (
    SnippetLanguage("CSharp", "C#", "Visual C#", MY_SNIPPETS_DIR),
    SnippetLanguage("Basic", "Visual Basic", "Visual Basic", MY_SNIPPETS_DIR),
    SnippetLanguage("XML", "XML", "XML", MY_XML_SNIPPETS_DIR),
)

# Store keys recognized under CODE_EXPANSIONS_SECTION; anything else is ignored
SUPPORTED_STORE_KEYS: frozenset[str] = frozenset(
    lang.store_key for lang in SNIPPET_LANGUAGES
)
