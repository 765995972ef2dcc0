from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identifier:
    """
    Coordinates of a package or project: type, namespace, name and version.

    namespace and version may be empty strings.
    """
    type: str
    namespace: str
    name: str
    version: str

    @classmethod
    def from_coordinates(cls, coordinates: str) -> "Identifier":
        """
        Parse "type:namespace:name:version". Missing trailing parts become "".
        Anything after the third colon belongs to the version.
        """
        parts = (coordinates or "").strip().split(":", 3)
        parts += [""] * (4 - len(parts))
        return cls(type=parts[0], namespace=parts[1], name=parts[2], version=parts[3])

    def to_coordinates(self) -> str:
        return f"{self.type}:{self.namespace}:{self.name}:{self.version}"

    def to_path(self, separator: str = "/") -> str:
        return separator.join((c or "_").replace("/", "%2F") for c in (self.type, self.namespace, self.name, self.version))

    def to_file_name(self, prefix: str, extension: str) -> str:
        # e.g. ort-cli_Maven-org.example-lib@1.0.xml
        out = prefix
        if self.type and self.type.strip():
            out += f"{self.type}-"
        if self.namespace and self.namespace.strip():
            out += f"{self.namespace}-"
        return f"{out}{self.name}@{self.version}.{extension}"

    def __str__(self) -> str:
        return self.to_coordinates()
