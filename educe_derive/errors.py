"""Errors raised when educe attributes are written incorrectly."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class EduceError(Exception):
    """Raised when an educe attribute or a derived type is malformed."""


def concat_usage(usages: Iterable[str]) -> str:
    """Describe the accepted forms of an attribute as one sentence."""
    quoted = [f"`{usage.replace(chr(10), '')}`" for usage in usages]
    if not quoted:
        return ""
    if len(quoted) == 1:
        body = quoted[0]
    else:
        body = ", ".join(quoted[:-1]) + ", or " + quoted[-1]
    return f" It needs to be formed into {body}."


def reuse_a_trait(t: Any) -> EduceError:
    """Return the error for a trait that is named twice."""
    return EduceError(f"The trait `{t!s}` is repeatedly used.")


def trait_not_used(t: Any) -> EduceError:
    """Return the error for a trait configured but not derived."""
    return EduceError(f"The `{t!s}` trait is not used.")


def trait_not_support_union(t: Any) -> EduceError:
    """Return the error for a trait that cannot be derived for a union."""
    return EduceError(f"The `{t!s}` trait does not support to a union.")


def attribute_incorrect_format(attribute_name: str, correct_usage: Iterable[str]) -> EduceError:
    """Return the error for an attribute written in an unknown form."""
    return EduceError(
        f"You are using an incorrect format of the `{attribute_name}` attribute."
        f"{concat_usage(correct_usage)}"
    )


def parameter_incorrect_format(parameter_name: str, correct_usage: Iterable[str]) -> EduceError:
    """Return the error for a parameter written in an unknown form."""
    return EduceError(
        f"You are using an incorrect format of the `{parameter_name}` parameter."
        f"{concat_usage(correct_usage)}"
    )


def derive_attribute_not_set_up_yet(attribute_name: str) -> EduceError:
    """Return the error for a derive that was asked for no trait at all."""
    return EduceError(
        f"You are using `{attribute_name}` in the `derive` attribute, "
        "but it has not been set up yet."
    )


def reset_parameter(parameter_name: str) -> EduceError:
    """Return the error for a parameter that is given twice."""
    return EduceError(f"Try to reset the `{parameter_name}` parameter.")


def unknown_parameter(attribute_name: str, parameter_name: str) -> EduceError:
    """Return the error for a parameter the attribute does not accept."""
    return EduceError(
        f"Unknown parameter `{parameter_name}` used in the `{attribute_name}` attribute."
    )


def empty_parameter(parameter_name: str) -> EduceError:
    """Return the error for a parameter given an empty value."""
    return EduceError(f"You can't set the `{parameter_name}` parameter to empty.")


def educe_format_incorrect() -> EduceError:
    """Return the error for a malformed top-level educe attribute."""
    return attribute_incorrect_format("educe", ["#[educe(Trait1, Trait2, ..., TraitN)]"])