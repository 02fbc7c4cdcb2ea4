"""
Ownership domain rules.

An ownership domain is the dotted package that defines a plugin class. Any
object whose type is declared in that package (or one of its subpackages)
is attributed to the plugin; everything else belongs to another plugin, a
shared library, or the host, and costs nothing.
"""

from __future__ import annotations


def module_of(type_: type) -> str | None:
    """Return the defining module of a type, or None if it has none."""
    module = getattr(type_, "__module__", None)
    if not isinstance(module, str) or not module:
        return None
    return module


def ownership_domain_of(type_: type) -> str | None:
    """Return the ownership domain for a plugin type.

    Examples:
        acme.inventory.plugin -> acme.inventory
        acme_tools            -> acme_tools   (top-level module is its own domain)
    """
    module = module_of(type_)
    if module is None:
        return None

    package, sep, _ = module.rpartition(".")
    if not sep:
        return module
    return package


def is_in_domain(module: str | None, domain: str | None) -> bool:
    """Return True if module equals domain or is nested below it.

    Matching is on whole dotted segments: "acme.inv" does not own
    "acme.inventory".
    """
    if module is None or not domain:
        return False
    return module == domain or module.startswith(domain + ".")


def is_owned_type(type_: type, domain: str | None) -> bool:
    return is_in_domain(module_of(type_), domain)
