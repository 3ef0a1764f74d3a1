"""Parsed struct descriptors."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CDeclaration:
    """One struct member: ``typename name;``.

    Pointer members carry the star in the type, e.g. ``int *p;`` becomes
    ``CDeclaration("int*", "p")``.
    """

    typename: str
    name: str

    @property
    def is_pointer(self) -> bool:
        return self.typename.endswith("*")

    def to_dict(self) -> dict[str, str]:
        return {"typename": self.typename, "name": self.name}


@dataclass(frozen=True)
class CStruct:
    """A recognised struct: its name and fields in declaration order."""

    name: str
    fields: tuple[CDeclaration, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        """Serialize for JSON output."""
        return {"name": self.name, "fields": [f.to_dict() for f in self.fields]}
