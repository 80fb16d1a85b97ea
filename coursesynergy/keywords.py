"""
Keyword extraction (course title -> topic tags).

Titles are normalized (lower-case, diacritics removed) and run through an
ordered rule table. Rules are plain regular expressions on the normalized
text, so patterns never need accented characters.

Rule semantics:
- exclusive rules are tried first, in table order; the first one that
  matches is the ONLY tag of the title (forklift beats platform, platform
  beats everything else)
- all other rules are scanned independently, every match adds its tag
- a rule may supersede more generic labels ("Puente Grua" drops "Grua")
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from coursesynergy.model import Tag


@dataclass(frozen=True)
class KeywordRule:
    pattern: str
    label: str
    weight: int = 1
    exclusive: bool = False
    supersedes: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.weight < 1:
            raise ValueError(f"Rule weight must be >= 1: {self.label!r}")

    @property
    def tag(self) -> Tag:
        return Tag(self.label, self.weight)


# Order matters: exclusive rules first, then specific before generic.
DEFAULT_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(r"carretilla|retracil|apilador|\bfrontal", "Carretillas", 3, exclusive=True),
    KeywordRule(r"plataforma|\bpemp\b", "PEMP", 3, exclusive=True),
    KeywordRule(r"elevador", "PEMP", 3),
    KeywordRule(r"puente.*grua", "Puente Grua", 3, supersedes=("Grua",)),
    KeywordRule(r"grua.*torre", "Grua Torre", 3, supersedes=("Grua",)),
    KeywordRule(r"grua.*movil|autogrua", "Grua Movil", 3, supersedes=("Grua",)),
    KeywordRule(r"grua", "Grua", 2),
    KeywordRule(r"espacio.*confinado", "Espacios Confinados", 3),
    KeywordRule(r"primeros.*auxilio", "Primeros Auxilios", 3),
    KeywordRule(r"extincion.*incendio|incendio.*extincion", "Extincion Incendios", 3, supersedes=("Incendios",)),
    KeywordRule(r"incendio|fuego", "Incendios", 2),
    KeywordRule(r"emergencia|evacuacion", "Emergencias", 2),
    KeywordRule(r"altura|vertical", "Trabajos en Altura", 3),
    KeywordRule(r"recurso.*preventivo", "Recurso Preventivo", 3),
    KeywordRule(r"electric|tension", "Riesgo Electrico", 3),
    KeywordRule(r"pantalla.*visualizacion|\bpvd\b", "PVD (Pantallas)", 3),
    KeywordRule(r"oficina", "Trabajo en Oficina", 2),
    KeywordRule(r"soldadura|soldar", "Soldadura", 3),
    KeywordRule(r"manipula.*carga|manual.*carga", "Manipulacion Cargas", 3),
    KeywordRule(r"ergonomi", "Ergonomia", 2),
    KeywordRule(r"senalizacion", "Senalizacion", 2),
    KeywordRule(r"ruido", "Ruido", 3),
    KeywordRule(r"quimico", "Riesgo Quimico", 3),
    KeywordRule(r"\batex\b|atmosfera.*explosiva", "ATEX", 3),
    KeywordRule(r"amianto", "Amianto", 3),
    KeywordRule(r"metal.*construccion|sector.*metal", "Sector Metal", 3, supersedes=("Metal", "Construccion")),
    KeywordRule(r"construccion", "Construccion", 2),
    KeywordRule(r"metal", "Metal", 2),
    KeywordRule(r"alimenta", "Alimentacion", 3),
    KeywordRule(r"\bdea\b|desfibrilador", "DEA", 3),
    KeywordRule(r"camion|vehiculo.*pesado", "Conduccion Vehiculos", 2, supersedes=("Conduccion",)),
    KeywordRule(r"conduccion", "Conduccion", 1),
    KeywordRule(r"liderazgo|equipo.*trabajo", "Liderazgo/Equipos", 2),
    # Generic vocabulary, never enough on its own in strict scoring
    KeywordRule(r"\bprl\b|prevencion.*riesgo", "PRL", 1),
    KeywordRule(r"basic", "Nivel Basico", 1),
    KeywordRule(r"seguridad", "Seguridad", 1),
)


def normalize_text(text: Optional[str]) -> str:
    """
    Lower-case and strip diacritics (NFD, drop combining marks).
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", str(text).lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


class KeywordExtractor:
    """
    Maps titles to tag sets using an immutable, injected rule table.
    """

    def __init__(self, rules: Iterable[KeywordRule] = DEFAULT_RULES) -> None:
        self._rules: Tuple[KeywordRule, ...] = tuple(rules)
        compiled = [(rule, re.compile(rule.pattern)) for rule in self._rules]
        self._exclusive = tuple(item for item in compiled if item[0].exclusive)
        self._regular = tuple(item for item in compiled if not item[0].exclusive)

    @property
    def rules(self) -> Tuple[KeywordRule, ...]:
        return self._rules

    def extract(self, title: Optional[str]) -> frozenset[Tag]:
        text = normalize_text(title)
        if not text:
            return frozenset()

        for rule, rx in self._exclusive:
            if rx.search(text):
                return frozenset({rule.tag})

        found = [rule for rule, rx in self._regular if rx.search(text)]
        superseded = {label for rule in found for label in rule.supersedes}
        return frozenset(rule.tag for rule in found if rule.label not in superseded)

    def labels(self, title: Optional[str]) -> list[str]:
        """
        Sorted tag labels of a title (stable for printing and exports).
        """
        return sorted({t.label for t in self.extract(title)})


def extract_tags(title: Optional[str], rules: Iterable[KeywordRule] = DEFAULT_RULES) -> frozenset[Tag]:
    return KeywordExtractor(rules).extract(title)
