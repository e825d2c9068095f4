# rainrate

A small hydrology model with a BMI-style interface, written in pure Python
with no third-party dependencies.

On each time step the model does two things:

- **Forward.** It converts the accumulated surface precipitation
  (`APCP_surface`, kg m-2) into a precipitation rate
  (`atmosphere_water__precipitation_rate`, m s-1). It uses the density of water
  at the current 2 m air temperature (`TMP_2maboveground`, K). The amount used
  is the one held from the previous step, in the model variable
  `surface_water__last_value`. On the first step that amount is 0.
- **Inverse.** It converts a precipitation rate (`precip_rate`, m/s) into an
  accumulated amount (`APCP_surface_shifted`, kg m-2).

For the inverse, the rate and the temperature can each be delayed by a number
of steps. Two integer model variables set the delays, `precip_rate_time_offset`
and `TMP_time_offset`:

- Both default to `-1`, a delay of one step.
- `0` means no delay: the current values are used.
- A positive value is an error.

The delays take effect on the first update after `initialize` or `finalize`.
Intermediate values are exposed as output variables:

- `partial_calc__TMP_2maboveground_apply_rho`
- `partial_calc__APCP_surface_shifted`
- `partial_calc__shifted_div_rho`

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Configuration

The model reads a plain `key=value` file, one setting per line. Unknown keys
are ignored.

```
epoch_start_time=0
num_time_steps=24
time_step_size=3600
```

- If `num_time_steps` is missing or zero, the model runs 24 steps.
- `time_step_size` is in seconds and defaults to 3600.
- A `model_end_time` line sets the step size, the same as `time_step_size`.
  The end time always comes from the step count and the step size.

## Using the model

```python
from rainrate.model import BmiRainRate

model = BmiRainRate()
model.initialize("config.txt")

model.set_value("APCP_surface", [2.5])
model.set_value("TMP_2maboveground", [288.15])
model.set_value("precip_rate", [1e-6])
model.update()

print(model.get_value("atmosphere_water__precipitation_rate"))
print(model.get_value("APCP_surface_shifted"))
print(model.get_current_time(), model.get_end_time(), model.get_time_units())

model.finalize()
```

Values are passed and returned as Python lists, one entry per item. Every
variable holds a single item.

- `get_value_at_indices(name, indices)` reads selected items.
- `set_value_at_indices(name, indices, values)` writes selected items.
- An empty index list raises `ValueError`.
- An index out of range raises `IndexError`.
- An unknown variable name raises `KeyError`, and the message lists the known
  variables.

Methods for inspecting the model:

- `get_input_var_names()` and `get_output_var_names()` list the variables.
  `get_input_item_count()` and `get_output_item_count()` count them.
- `get_var_type()`, `get_var_units()`, `get_var_location()`,
  `get_var_itemsize()` and `get_var_nbytes()` describe a variable.
- `get_start_time()`, `get_current_time()`, `get_end_time()`,
  `get_time_step()` and `get_time_units()` report the model clock, in seconds.
- `update_until(time)` runs one step and sets the current time to `time`.

The model has a single scalar grid, grid `0`:

- `get_grid_rank(0)` returns 1.
- `get_grid_size(0)` returns 1.
- `get_grid_type(0)` returns `"scalar"`.
- Any other grid raises `ValueError`.

`rainrate.physics` can be used on its own. It provides
`rho_from_temperature` (the temperature is in °C), `rain_rate`,
`precipitation` and `format_rain_rate`.

Other modules you can use directly:

- `rainrate.config`: `read_config` and `count_lines`.
- `rainrate.registry`: `VariableRegistry` and `VarRole`.
- `rainrate.stored_var`: `StoredVar`, `ShiftQueue` and `format_value`.

## Command line

```
rainrate [CONFIG]
```

The command does the following, in order:

1. Initializes a model from `CONFIG`. The default is `../test/test_cfg.txt`.
2. Runs a self-check of `ShiftQueue` and prints the queue contents to standard
   output.
3. Finalizes the model.

It exits with status 1 if the configuration file cannot be read.

## What it does not do

- There are no grid geometry queries: no shape, spacing, origin, coordinates,
  nodes, edges or faces, and no per-variable grid lookup.
- Values are never exposed by reference. Reads return copies, and writes go
  through the `set_value` methods.
- The command does not run the model over time.