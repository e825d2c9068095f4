"""Registry of model variables grouped by their BMI role."""

from __future__ import annotations

import struct
from enum import Enum
from typing import Iterable, Iterator

from rainrate.stored_var import StoredVar

TYPE_SIZES: dict[str, int] = {
    "double": struct.calcsize("d"),
    "float": struct.calcsize("f"),
    "int": struct.calcsize("i"),
    "short": struct.calcsize("h"),
    "long": struct.calcsize("l"),
}


class VarRole(Enum):
    """The part a variable plays in the model."""

    INPUT = 0
    OUTPUT = 1
    MODEL = 2


class VariableRegistry:
    """Variables held per role, searched in the order input, output, model."""

    def __init__(
        self, initial: Iterable[tuple[StoredVar, VarRole]] = ()
    ) -> None:
        self._vars: dict[VarRole, list[StoredVar]] = {role: [] for role in VarRole}
        for var, role in initial:
            self.add(var, role)

    def add(self, var: StoredVar, role: VarRole) -> StoredVar:
        """Register ``var`` under ``role`` unless that role already has its name.

        Returns the variable registered under that name.
        """
        for existing in self._vars[role]:
            if existing.name == var.name:
                return existing
        self._vars[role].append(var)
        return var

    def _find(self, name: str) -> tuple[StoredVar, VarRole] | None:
        for role, variables in self._vars.items():
            for var in variables:
                if var.name == name:
                    return var, role
        return None

    def get(self, name: str) -> StoredVar:
        """Return the variable called ``name``.

        Raises KeyError, listing the known variables, when there is none.
        """
        found = self._find(name)
        if found is None:
            raise KeyError(
                f"Unknown variable: {name}{self.unknown_variable_hint()}"
            )
        return found[0]

    def role_of(self, name: str) -> VarRole:
        """Return the role under which ``name`` is registered."""
        found = self._find(name)
        if found is None:
            raise KeyError(f"Variable not found: {name}")
        return found[1]

    def variables(self, role: VarRole) -> list[StoredVar]:
        """Return the variables of ``role`` in registration order."""
        return list(self._vars[role])

    def names(self, role: VarRole) -> list[str]:
        """Return the names of the variables of ``role`` in registration order."""
        return [var.name for var in self._vars[role]]

    def count(self, role: VarRole) -> int:
        """Return how many variables ``role`` holds."""
        return len(self._vars[role])

    def unknown_variable_hint(self) -> str:
        """Return a listing of every known variable, for error messages."""
        return "\n\tAvailable variables are: \n" + "".join(
            f"\t\t{var.name}\n" for var in self
        )

    def item_size(self, name: str) -> int:
        """Return the size in bytes of one item of variable ``name``."""
        var_type = self.get(name).type
        try:
            return TYPE_SIZES[var_type]
        except KeyError:
            raise ValueError(
                f'Item "{name}" has illegal type "{var_type}"!'
            ) from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._find(name) is not None

    def __iter__(self) -> Iterator[StoredVar]:
        for variables in self._vars.values():
            yield from variables

    def __len__(self) -> int:
        return sum(len(variables) for variables in self._vars.values())