import struct

import pytest

from rainrate.registry import VariableRegistry, VarRole
from rainrate.stored_var import StoredVar


def _var(name, type_="double", units="K"):
    return StoredVar(0.0, name, type_, units, "node", 1, 1)


@pytest.fixture
def registry():
    reg = VariableRegistry()
    reg.add(_var("APCP_surface", units="kg m-2"), VarRole.INPUT)
    reg.add(_var("TMP_2maboveground"), VarRole.INPUT)
    reg.add(_var("atmosphere_water__precipitation_rate", units="m s-1"), VarRole.OUTPUT)
    reg.add(_var("surface_water__last_value", units="kg m-2"), VarRole.MODEL)
    reg.add(StoredVar(-1, "TMP_time_offset", "int", "s", "node", 1, 1), VarRole.MODEL)
    return reg


def test_names_keep_registration_order(registry):
    assert registry.names(VarRole.INPUT) == ["APCP_surface", "TMP_2maboveground"]
    assert registry.names(VarRole.OUTPUT) == ["atmosphere_water__precipitation_rate"]
    assert registry.names(VarRole.MODEL) == [
        "surface_water__last_value",
        "TMP_time_offset",
    ]


def test_counts(registry):
    assert registry.count(VarRole.INPUT) == 2
    assert registry.count(VarRole.OUTPUT) == 1
    assert registry.count(VarRole.MODEL) == 2
    assert len(registry) == 5


def test_get_returns_registered_object(registry):
    var = _var("precip_rate", units="m/s")
    registry.add(var, VarRole.INPUT)
    assert registry.get("precip_rate") is var
    assert registry.get("precip_rate").units == "m/s"


def test_duplicate_name_in_same_role_is_ignored(registry):
    first = registry.get("APCP_surface")
    returned = registry.add(_var("APCP_surface", units="other"), VarRole.INPUT)
    assert returned is first
    assert registry.count(VarRole.INPUT) == 2
    assert registry.get("APCP_surface").units == "kg m-2"


def test_same_name_in_other_role_resolves_to_first_role(registry):
    registry.add(_var("APCP_surface", units="other"), VarRole.OUTPUT)
    assert registry.count(VarRole.OUTPUT) == 2
    assert registry.role_of("APCP_surface") is VarRole.INPUT
    assert registry.get("APCP_surface").units == "kg m-2"


def test_role_of(registry):
    assert registry.role_of("TMP_2maboveground") is VarRole.INPUT
    assert registry.role_of("atmosphere_water__precipitation_rate") is VarRole.OUTPUT
    assert registry.role_of("TMP_time_offset") is VarRole.MODEL


def test_role_of_unknown_raises(registry):
    with pytest.raises(KeyError, match="Variable not found: nope"):
        registry.role_of("nope")


def test_unknown_variable_hint_format():
    reg = VariableRegistry([(_var("a"), VarRole.MODEL), (_var("b"), VarRole.INPUT)])
    assert reg.unknown_variable_hint() == (
        "\n\tAvailable variables are: \n\t\tb\n\t\ta\n"
    )


def test_item_size_matches_native_sizes(registry):
    assert registry.item_size("APCP_surface") == struct.calcsize("d")
    assert registry.item_size("TMP_time_offset") == struct.calcsize("i")


@pytest.mark.parametrize(
    "type_, fmt",
    [("double", "d"), ("float", "f"), ("int", "i"), ("short", "h"), ("long", "l")],
)
def test_item_size_per_type(type_, fmt):
    reg = VariableRegistry([(_var("x", type_=type_), VarRole.MODEL)])
    assert reg.item_size("x") == struct.calcsize(fmt)


def test_item_size_illegal_type():
    reg = VariableRegistry([(_var("x", type_="string"), VarRole.MODEL)])
    with pytest.raises(ValueError, match='Item "x" has illegal type "string"!'):
        reg.item_size("x")


def test_item_size_unknown_variable(registry):
    with pytest.raises(KeyError):
        registry.item_size("missing")


def test_contains_and_iteration_order(registry):
    assert "TMP_2maboveground" in registry
    assert "missing" not in registry
    assert [var.name for var in registry] == [
        "APCP_surface",
        "TMP_2maboveground",
        "atmosphere_water__precipitation_rate",
        "surface_water__last_value",
        "TMP_time_offset",
    ]


def test_variables_returns_copy(registry):
    listed = registry.variables(VarRole.INPUT)
    listed.clear()
    assert registry.count(VarRole.INPUT) == 2