"""
Task Registry
=============

Maps every TaskVariant to the tag the server recognizes, its option record
and its solution record. The table is the single source of truth: the tag
is a property of the variant, never derived from option contents.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Type, Any

from ..core.errors import UnsupportedVariant
from .models import (
    TaskVariant,
    TaskOptions,
    TaskSolution,
    KasadaOptions,
    KasadaSolution,
    Reese84Options,
    Reese84Solution,
    UtmvcOptions,
    UtmvcSolution,
    TwitchScraperOptions,
    TwitchScraperSolution,
    TwitchIntegrityOptions,
    TwitchIntegritySolution,
    TwitchPublicIntegrityOptions,
    TwitchPublicIntegritySolution,
    TwitchLocalIntegrityOptions,
    TwitchLocalIntegritySolution,
    BalanceOptions,
)


@dataclass(frozen=True)
class VariantSpec:
    """Static description of one task variant"""
    tag: str
    options: Type[TaskOptions]
    solution: Optional[Type[TaskSolution]]  # None: solution is a decimal string
    deprecated: bool = False


VARIANTS: Dict[TaskVariant, VariantSpec] = {
    TaskVariant.KASADA: VariantSpec(
        "KasadaCaptchaSolver", KasadaOptions, KasadaSolution),
    TaskVariant.REESE84: VariantSpec(
        "IncapsulaReese84Solver", Reese84Options, Reese84Solution),
    TaskVariant.UTMVC: VariantSpec(
        "IncapsulaUTMVCSolver", UtmvcOptions, UtmvcSolution),
    TaskVariant.TWITCH_SCRAPER: VariantSpec(
        "Twitch_Scraper", TwitchScraperOptions, TwitchScraperSolution),
    TaskVariant.TWITCH_INTEGRITY: VariantSpec(
        "Twitch_PublicIntegrity", TwitchIntegrityOptions, TwitchIntegritySolution),
    TaskVariant.TWITCH_PUBLIC_INTEGRITY: VariantSpec(
        "Twitch_PublicIntegrity", TwitchPublicIntegrityOptions, TwitchPublicIntegritySolution,
        deprecated=True),
    TaskVariant.TWITCH_LOCAL_INTEGRITY: VariantSpec(
        "Twitch_LocalIntegrity", TwitchLocalIntegrityOptions, TwitchLocalIntegritySolution,
        deprecated=True),
    TaskVariant.BALANCE: VariantSpec(
        "getBalance", BalanceOptions, None),
}

_BY_OPTIONS: Dict[Type[TaskOptions], TaskVariant] = {
    spec.options: variant for variant, spec in VARIANTS.items()
}


def spec_for(variant: Any) -> VariantSpec:
    """
    Look up the static description of a variant.

    Raises:
        UnsupportedVariant: variant is not a TaskVariant member
    """
    if not isinstance(variant, TaskVariant):
        raise UnsupportedVariant(variant)
    return VARIANTS[variant]


def resolve(variant: Any) -> str:
    """Return the server tag of a variant"""
    return spec_for(variant).tag


def variant_of(options: Any) -> TaskVariant:
    """
    Identify the variant an option record belongs to.

    Only the exact option classes in the registry are accepted; anything
    else (plain dicts, strings, subclasses) is rejected rather than mapped
    to a default tag.

    Raises:
        UnsupportedVariant: options is not one of the known option records
    """
    try:
        return _BY_OPTIONS[type(options)]
    except KeyError:
        raise UnsupportedVariant(options) from None
