"""UniProt species list: parsing and shared loading.

Public API::

    from species_explorer.speclist import SpeciesListLoader, parse_speclist

    names = parse_speclist(text)
    # {"Canis lupus": "Gray wolf", ...}

    loader = SpeciesListLoader(client, url, cache)
    await loader.get_common_names(["Canis lupus", "Felis catus"])
"""

from .loader import LoaderState, LoadResult, SpeciesListLoader
from .parser import ParserState, Section, parse_lines, parse_speclist, step

__all__ = [
    "LoaderState",
    "LoadResult",
    "SpeciesListLoader",
    "ParserState",
    "Section",
    "parse_lines",
    "parse_speclist",
    "step",
]
