"""Rain-rate model exposed through a BMI-style interface."""

from __future__ import annotations

import math
import os
import struct
from typing import Any, Iterable, Union

from rainrate import physics
from rainrate.config import DEFAULT_TIME_STEP_SIZE, read_config
from rainrate.registry import VariableRegistry, VarRole
from rainrate.stored_var import ShiftQueue, StoredVar

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_TIME_STEP_COUNT = 24
KELVIN_OFFSET = 273.15

TMP_OFFSET = "TMP_time_offset"
PRECIP_OFFSET = "precip_rate_time_offset"


def _var(
    name: str, units: str, grid: int, value: Any = 0.0, var_type: str = "double"
) -> StoredVar:
    return StoredVar(value, name, var_type, units, "node", 1, grid)


def _coerce(var_type: str, value: Any) -> Any:
    """Convert ``value`` to the Python representation of a BMI type."""
    if var_type == "double":
        return float(value)
    if var_type == "float":
        return struct.unpack("f", struct.pack("f", float(value)))[0]
    if var_type in ("int", "short", "long"):
        return int(value)
    raise ValueError(f'Unsupported variable type "{var_type}"')


def _as_list(values: Any) -> list[Any]:
    if isinstance(values, (str, bytes)):
        raise TypeError("Variable values must be numbers")
    try:
        return list(values)
    except TypeError:
        return [values]


class BmiRainRate:
    """Converts surface precipitation into a rain rate, and rain rates back."""

    def __init__(self) -> None:
        self._registry = VariableRegistry(
            [
                (_var("APCP_surface", "kg m-2", 1), VarRole.INPUT),
                (_var("TMP_2maboveground", "K", 1), VarRole.INPUT),
                (
                    _var("atmosphere_water__precipitation_rate", "m s-1", 1),
                    VarRole.OUTPUT,
                ),
                (_var("surface_water__last_value", "kg m-2", 1), VarRole.MODEL),
            ]
        )
        self._queues: dict[str, ShiftQueue] = {}
        self.epoch_start_time = 0
        self._num_time_steps = 0
        self._current_model_time = 0.0
        self._current_time_step = 0
        self._model_end_time = 0.0
        self._time_step_size = DEFAULT_TIME_STEP_SIZE

    # -- lifecycle ---------------------------------------------------------

    def initialize(self, config_file: PathLike) -> None:
        """Read the configuration and register the full set of variables."""
        if not os.fspath(config_file):
            raise ValueError("No configuration file path provided.")
        config = read_config(config_file)
        self.epoch_start_time = config.epoch_start_time
        self._num_time_steps = config.num_time_steps
        self._time_step_size = config.time_step_size

        self._current_model_time = self.get_start_time()
        if self._num_time_steps == 0 and self._model_end_time == 0:
            self._num_time_steps = DEFAULT_TIME_STEP_COUNT
        if self._model_end_time == 0:
            self._model_end_time = self._current_model_time + (
                self._num_time_steps * self._time_step_size
            )
        if self._num_time_steps == 0:
            self._num_time_steps = math.floor(
                (self._model_end_time - self._current_model_time)
                / self._time_step_size
            )

        additions = [
            (_var("partial_calc__TMP_2maboveground_apply_rho", "kg m-3", 0), VarRole.OUTPUT),
            (_var("partial_calc__APCP_surface_shifted", "kg m-2", 0), VarRole.OUTPUT),
            (_var("partial_calc__shifted_div_rho", "m", 0), VarRole.OUTPUT),
            (_var("precip_rate", "m/s", 0), VarRole.INPUT),
            (_var("precip_rate_store", "kg m-2", 0), VarRole.MODEL),
            (_var("TMP_2aboveground_store", "K", 0), VarRole.MODEL),
            (_var("APCP_surface_shifted", "kg m-2", 0), VarRole.OUTPUT),
            (
                _var(TMP_OFFSET, "s", 1, -1, "int").setup("initialize"),
                VarRole.MODEL,
            ),
            (
                _var(PRECIP_OFFSET, "s", 1, -1, "int").setup("initialize"),
                VarRole.MODEL,
            ),
        ]
        for var, role in additions:
            self._registry.add(var, role)

    def update(self) -> None:
        """Advance the model by one time step."""
        self.update_until(self._current_model_time + self._time_step_size)

    def update_until(self, time: float) -> None:
        """Run one model step and set the current time to ``time``."""
        self._run(int(time - self._current_model_time))
        self._current_model_time = time

    def finalize(self) -> None:
        """Drop the history queues; a later update starts them afresh."""
        self._queues.clear()
        self._current_time_step = 0

    # -- model information -------------------------------------------------

    def get_component_name(self) -> str:
        return "BMI Rain Rate"

    def get_input_item_count(self) -> int:
        return self._registry.count(VarRole.INPUT)

    def get_output_item_count(self) -> int:
        return self._registry.count(VarRole.OUTPUT)

    def get_input_var_names(self) -> list[str]:
        return self._registry.names(VarRole.INPUT)

    def get_output_var_names(self) -> list[str]:
        return self._registry.names(VarRole.OUTPUT)

    # -- variable information ----------------------------------------------

    def get_var_type(self, name: str) -> str:
        return self._registry.get(name).type

    def get_var_units(self, name: str) -> str:
        return self._registry.get(name).units

    def get_var_itemsize(self, name: str) -> int:
        return self._registry.item_size(name)

    def get_var_nbytes(self, name: str) -> int:
        return self.get_var_itemsize(name) * self._registry.get(name).item_count

    def get_var_location(self, name: str) -> str:
        return self._registry.get(name).location

    # -- time --------------------------------------------------------------

    def get_current_time(self) -> float:
        return self._current_model_time

    def get_start_time(self) -> float:
        return 0.0

    def get_end_time(self) -> float:
        return self.get_start_time() + self._num_time_steps * self._time_step_size

    def get_time_units(self) -> str:
        return "s"

    def get_time_step(self) -> float:
        return float(self._time_step_size)

    # -- values ------------------------------------------------------------

    @staticmethod
    def _items(var: StoredVar) -> list[Any]:
        return [var.value] if var.item_count == 1 else list(var.value)

    @staticmethod
    def _store(var: StoredVar, items: list[Any]) -> None:
        var.value = items[0] if var.item_count == 1 else list(items)

    def get_value(self, name: str) -> list[Any]:
        """Return every item of variable ``name``."""
        var = self._registry.get(name)
        return self.get_value_at_indices(name, range(var.item_count))

    def get_value_at_indices(self, name: str, indices: Iterable[int]) -> list[Any]:
        """Return the items of variable ``name`` at ``indices``."""
        indices = list(indices)
        if len(indices) < 1:
            raise ValueError(f"Illegal count {len(indices)} provided to get_value_at_indices")
        var = self._registry.get(name)
        items = self._items(var)
        result = []
        for index in indices:
            if not 0 <= index < len(items):
                raise IndexError(f"Index {index} out of range for variable {name}")
            result.append(_coerce(var.type, items[index]))
        return result

    def set_value(self, name: str, values: Any) -> None:
        """Replace every item of variable ``name`` with ``values``."""
        var = self._registry.get(name)
        self.get_var_nbytes(name)
        items = _as_list(values)
        if len(items) < var.item_count:
            raise ValueError(
                f"Variable {name} needs {var.item_count} values, got {len(items)}"
            )
        self._store(var, [_coerce(var.type, v) for v in items[: var.item_count]])

    def set_value_at_indices(
        self, name: str, indices: Iterable[int], values: Iterable[Any]
    ) -> None:
        """Set the items of variable ``name`` at ``indices`` to ``values``."""
        indices = list(indices)
        if len(indices) < 1:
            raise ValueError(f"Illegal count {len(indices)} provided to set_value_at_indices")
        var = self._registry.get(name)
        values = _as_list(values)
        if len(values) < len(indices):
            raise ValueError(f"{len(indices)} indices given but only {len(values)} values")
        items = self._items(var)
        for index, value in zip(indices, values):
            if not 0 <= index < len(items):
                raise IndexError(f"Index {index} out of range for variable {name}")
            items[index] = _coerce(var.type, value)
        self._store(var, items)

    # -- grid --------------------------------------------------------------

    def get_grid_rank(self, grid: int) -> int:
        if grid == 0:
            return 1
        raise ValueError("Rank requested for non-existent grid.")

    def get_grid_size(self, grid: int) -> int:
        if grid == 0:
            return 1
        raise ValueError("Size requested for non-existent grid.")

    def get_grid_type(self, grid: int) -> str:
        if grid == 0:
            return "scalar"
        raise ValueError("Type requested for non-existent grid.")

    # -- computation -------------------------------------------------------

    def _value(self, name: str) -> Any:
        return self._registry.get(name).value

    def _run(self, dt: int) -> None:
        tmp_offset = int(self._value(TMP_OFFSET))
        precip_offset = int(self._value(PRECIP_OFFSET))
        if self._current_time_step == 0:
            if tmp_offset > 0:
                raise ValueError("TMP_time_offset must be <= 0")
            if precip_offset > 0:
                raise ValueError("precip_rate_time_offset must be <= 0")
            for name, offset in ((TMP_OFFSET, tmp_offset), (PRECIP_OFFSET, precip_offset)):
                self._queues[name] = ShiftQueue(name, 0.0, max(1, -offset))
        self._current_time_step += 1

        inputs = self._registry.variables(VarRole.INPUT)
        outputs = self._registry.variables(VarRole.OUTPUT)
        model = self._registry.variables(VarRole.MODEL)
        surface_water, temperature, precip_rate_in = inputs[0], inputs[1], inputs[2]
        rate_out = outputs[0]
        # Diagnostics are written from the third output slot onwards; the last
        # of them shares its slot with the inversion output.
        partial_rho, partial_shifted, partial_div = outputs[2:5]
        inversion_out = outputs[4]
        last_value = model[0]

        precip = float(last_value.value)
        temp = float(temperature.value)
        rho = physics.rho_from_temperature(temp - KELVIN_OFFSET)

        partial_rho.value = rho
        partial_shifted.value = precip
        partial_div.value = precip / rho

        rate = physics.rain_rate(rho, precip, self._time_step_size)

        precip_queue = self._queues[PRECIP_OFFSET]
        tmp_queue = self._queues[TMP_OFFSET]
        precip_rate_store = float(precip_queue.get())
        tmp_store = float(tmp_queue.get())
        precip_queue.push(float(precip_rate_in.value))
        tmp_queue.push(temp)

        if tmp_offset == 0:
            tmp_store = temp
        if precip_offset == 0:
            precip_rate_store = float(precip_rate_in.value)

        prev_rho = physics.rho_from_temperature(tmp_store - KELVIN_OFFSET)
        inversion_out.value = physics.precipitation(
            prev_rho, precip_rate_store, self._time_step_size
        )
        rate_out.value = rate
        last_value.value = surface_water.value

        self._current_model_time += dt