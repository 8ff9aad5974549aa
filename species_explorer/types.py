"""
Species Explorer type definitions.

Red List API payloads are only checked for the fields that identify a
record; everything else is optional and defaults to empty values.
"""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class CategoryInfo:
    """Display attributes for a Red List category."""
    code: str
    name: str
    color: str


@dataclass
class Assessment:
    """One entry of an ``assessments`` listing."""
    assessment_id: int
    sis_taxon_id: int
    taxon_scientific_name: str
    red_list_category_code: str = ""
    year_published: str = ""
    url: str = ""
    latest: bool = False
    possibly_extinct: bool = False
    possibly_extinct_in_the_wild: bool = False
    scopes: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Assessment":
        """Build from API JSON. Raises KeyError if an id or the name is missing."""
        return cls(
            assessment_id=int(data["assessment_id"]),
            sis_taxon_id=int(data.get("sis_taxon_id") or 0),
            taxon_scientific_name=str(data["taxon_scientific_name"]),
            red_list_category_code=str(data.get("red_list_category_code") or ""),
            year_published=str(data.get("year_published") or ""),
            url=str(data.get("url") or ""),
            latest=bool(data.get("latest", False)),
            possibly_extinct=bool(data.get("possibly_extinct", False)),
            possibly_extinct_in_the_wild=bool(data.get("possibly_extinct_in_the_wild", False)),
            scopes=list(data.get("scopes") or []),
        )

    @property
    def genus_name(self) -> str:
        return self.taxon_scientific_name.split(" ")[0]


@dataclass
class Species:
    """A species row as shown in the browse list."""
    assessment_id: int  # used to fetch the full assessment
    taxonid: int
    scientific_name: str
    kingdom_name: str = ""
    phylum_name: str = ""
    class_name: str = ""
    order_name: str = ""
    family_name: str = ""
    genus_name: str = ""
    main_common_name: str = ""
    authority: str = ""
    published_year: int = 0
    assessment_date: str = ""
    category: str = ""
    criteria: str = ""
    population_trend: str = ""
    marine_system: bool = False
    freshwater_system: bool = False
    terrestrial_system: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Species":
        known = {f for f in cls.__dataclass_fields__}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class AssessmentDetail:
    """Full assessment record.

    Only the headline fields are lifted out; ``raw`` keeps the whole payload
    (documentation, habitats, threats, ...) for the UI to render.
    """
    assessment_id: int
    taxon: dict[str, Any] = field(default_factory=dict)
    red_list_category: dict[str, Any] = field(default_factory=dict)
    year_published: str = ""
    criteria: str = ""
    url: str = ""
    citation: str = ""
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AssessmentDetail":
        """Build from API JSON. Raises KeyError if ``assessment_id`` is missing."""
        return cls(
            assessment_id=int(data["assessment_id"]),
            taxon=dict(data.get("taxon") or {}),
            red_list_category=dict(data.get("red_list_category") or {}),
            year_published=str(data.get("year_published") or ""),
            criteria=str(data.get("criteria") or ""),
            url=str(data.get("url") or ""),
            citation=str(data.get("citation") or ""),
            raw=data,
        )

    @property
    def scientific_name(self) -> str:
        return str(self.taxon.get("scientific_name", ""))

    @property
    def category_code(self) -> str:
        return str(self.red_list_category.get("code", ""))

    @property
    def main_common_name(self) -> str | None:
        """English main common name from the taxon block, if any."""
        for entry in self.taxon.get("common_names") or []:
            if entry.get("main") and entry.get("language", "eng") == "eng":
                return entry.get("name")
        return None
