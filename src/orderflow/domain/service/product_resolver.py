"""Domain service: resolve heterogeneous product references.

A reference is either a canonical identity or an alternate catalog code
(see ``parse_product_ref``).  Resolution is the one place that knows how
each kind is looked up.  A canonical identity that matches no product is
retried as a catalog code, since some catalogs use 24-hex codes.
"""

from __future__ import annotations

from collections.abc import Iterable

from orderflow.domain.model.product import Product
from orderflow.domain.model.value_objects import AlternateCode, CanonicalId, ProductRef
from orderflow.domain.repository.product_repository import ProductRepository


def fetch_product(repo: ProductRepository, ref: ProductRef) -> Product | None:
    """Look up a single product by either kind of reference."""
    if isinstance(ref, CanonicalId):
        product = repo.get_by_id(ref.value)
        if product is None:
            product = repo.get_by_code(_code_value(ref.raw.strip()))
        return product
    if isinstance(ref, AlternateCode):
        return repo.get_by_code(ref.value)
    raise TypeError(f"Unsupported product reference: {ref!r}")


class ProductResolver:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def resolve(self, refs: Iterable[ProductRef]) -> dict[str, Product]:
        """Return ``{ref.raw: product}`` for every reference that resolves.

        References are deduplicated and looked up in two batches: identities
        first, then codes (including identities that matched nothing).
        Unresolved references are simply absent from the result; callers
        check membership.
        """
        canonical: dict[str, list[CanonicalId]] = {}
        codes: dict[str, list[str]] = {}
        for ref in refs:
            if isinstance(ref, CanonicalId):
                canonical.setdefault(ref.value, []).append(ref)
            else:
                codes.setdefault(str(ref.value), []).append(ref.raw)

        found: dict[str, Product] = {}
        if canonical:
            for product in self._product_repo.find_by_ids(list(canonical)):
                for ref in canonical.pop(product.id.lower(), []):
                    found[ref.raw] = product
            for unmatched in canonical.values():
                for ref in unmatched:
                    codes.setdefault(ref.raw.strip(), []).append(ref.raw)
        if codes:
            wanted = [_code_value(key) for key in codes]
            for product in self._product_repo.find_by_codes(wanted):
                if product.code is None:
                    continue
                for raw in codes.get(str(product.code), []):
                    found[raw] = product
        return found


def _code_value(key: str) -> int | str:
    return int(key) if key.isdigit() else key
