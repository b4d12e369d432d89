"""Catalog of legacy polyfills whose bundle weight is estimated.

Each entry pairs the user-facing feature name with the core-js 3 module that
implements it. The bytes of this file are part of the build-variant cache key:
editing the catalog invalidates previously built variants.
"""

from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


CATALOG_MODULE_PATH = Path(__file__).resolve()


class PolyfillCatalogEntry(BaseModel):
    """A single polyfill known to the legacy JavaScript analysis."""
    name: str = Field(..., min_length=1, description="Feature name, e.g. 'Array.prototype.fill'")
    core_js3_module: str = Field(
        ...,
        min_length=1,
        alias="coreJs3Module",
        description="core-js 3 module id, e.g. 'es.array.fill'",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


_POLYFILLS = [
    ('Array.prototype.fill', 'es.array.fill'),
    ('Array.prototype.filter', 'es.array.filter'),
    ('Array.prototype.find', 'es.array.find'),
    ('Array.prototype.findIndex', 'es.array.find-index'),
    ('Array.prototype.forEach', 'es.array.for-each'),
    ('Array.from', 'es.array.from'),
    ('Array.isArray', 'es.array.is-array'),
    ('Array.prototype.includes', 'es.array.includes'),
    ('Array.prototype.lastIndexOf', 'es.array.last-index-of'),
    ('Array.prototype.map', 'es.array.map'),
    ('Array.of', 'es.array.of'),
    ('Array.prototype.reduce', 'es.array.reduce'),
    ('Array.prototype.reduceRight', 'es.array.reduce-right'),
    ('Array.prototype.some', 'es.array.some'),
    ('Date.now', 'es.date.now'),
    ('Date.prototype.toISOString', 'es.date.to-iso-string'),
    ('Date.prototype.toJSON', 'es.date.to-json'),
    ('Date.prototype.toString', 'es.date.to-string'),
    ('Function.prototype.name', 'es.function.name'),
    ('Number.isInteger', 'es.number.is-integer'),
    ('Number.isSafeInteger', 'es.number.is-safe-integer'),
    ('Object.defineProperties', 'es.object.define-properties'),
    ('Object.defineProperty', 'es.object.define-property'),
    ('Object.entries', 'es.object.entries'),
    ('Object.freeze', 'es.object.freeze'),
    ('Object.getOwnPropertyDescriptors', 'es.object.get-own-property-descriptors'),
    ('Object.getPrototypeOf', 'es.object.get-prototype-of'),
    ('Object.isExtensible', 'es.object.is-extensible'),
    ('Object.isFrozen', 'es.object.is-frozen'),
    ('Object.isSealed', 'es.object.is-sealed'),
    ('Object.keys', 'es.object.keys'),
    ('Object.preventExtensions', 'es.object.prevent-extensions'),
    ('Object.seal', 'es.object.seal'),
    ('Object.setPrototypeOf', 'es.object.set-prototype-of'),
    ('Object.values', 'es.object.values'),
    ('Reflect.apply', 'es.reflect.apply'),
    ('Reflect.construct', 'es.reflect.construct'),
    ('Reflect.defineProperty', 'es.reflect.define-property'),
    ('Reflect.deleteProperty', 'es.reflect.delete-property'),
    ('Reflect.get', 'es.reflect.get'),
    ('Reflect.getOwnPropertyDescriptor', 'es.reflect.get-own-property-descriptor'),
    ('Reflect.getPrototypeOf', 'es.reflect.get-prototype-of'),
    ('Reflect.has', 'es.reflect.has'),
    ('Reflect.isExtensible', 'es.reflect.is-extensible'),
    ('Reflect.ownKeys', 'es.reflect.own-keys'),
    ('Reflect.preventExtensions', 'es.reflect.prevent-extensions'),
    ('Reflect.setPrototypeOf', 'es.reflect.set-prototype-of'),
    ('String.prototype.codePointAt', 'es.string.code-point-at'),
    ('String.fromCodePoint', 'es.string.from-code-point'),
    ('String.raw', 'es.string.raw'),
    ('String.prototype.repeat', 'es.string.repeat'),
]


def get_polyfill_data() -> Tuple[PolyfillCatalogEntry, ...]:
    """Return the catalog in its canonical order."""
    return tuple(
        PolyfillCatalogEntry(name=name, core_js3_module=module)
        for name, module in _POLYFILLS
    )
