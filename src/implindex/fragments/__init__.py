"""Reading, writing and loading implementor fragment files."""

from implindex.fragments.codec import (
    FragmentFormat,
    load_fragment_file,
    parse_fragment,
    render_fragment,
    write_fragment_file,
)
from implindex.fragments.loader import FragmentLoader, LoadReport, trait_path_for

__all__ = [
    "FragmentFormat",
    "parse_fragment",
    "render_fragment",
    "load_fragment_file",
    "write_fragment_file",
    "FragmentLoader",
    "LoadReport",
    "trait_path_for",
]
