# packcli

Building blocks for command-line tools, written in plain Python with no
third-party dependencies.

## Modules

- `packcli.flags.sets` — `Sets` groups several named `Set` objects that are
  parsed together but listed separately in help. Arguments are parsed
  POSIX-style (`--name value`, `--name=value`, `-n value`, flags after
  positionals allowed); if any argument is a single-dash long flag
  (`-name value`), parsing switches to that style instead, where flags must
  come before positional arguments. Problems raise `FlagError`.
  Each `Set` defines typed flags with `bool_var`, `int_var`, `int64_var`,
  `uint_var`, `uint64_var`, `float64_var`, `duration_var`, `enum_var`,
  `enum_single_var`, `string_slice_var` and `string_map_var`. Most take
  `usage`, `default`, `shorthand`, `aliases`, `hidden`, `env_var` (read once
  when the flag is defined) and `completion`; several accept a `set_hook`
  called on every assignment. `Sets.help()` builds wrapped help text grouped
  by set, and `Sets.hide_unused_flags()` hides chosen flags from it.
- `packcli.flags.scalars` and `packcli.flags.listvalues` — the value classes
  behind those flags (`BoolValue`, `IntValue`, `UintValue`, `FloatValue`,
  `DurationValue`, `EnumValue`, `EnumSingleValue`, `StringSliceValue`,
  `StringMapValue`, ...), each with `set()`, `get()` and `example()`.
- `packcli.flags.flagutil` — parsing helpers (`parse_bool`, `parse_int`,
  `parse_uint` with `0x`/`0o`/`0b`/leading-zero prefixes, `parse_duration`
  and `format_duration` for strings such as `"1h15m30.5s"`), environment
  defaults (`env_default`, `env_bool_default`, `env_duration_default`) and
  `wrap_at_length_with_padding`. Durations are held in seconds.
- `packcli.spinner` — `Spinner`, a terminal progress indicator that animates
  a character set on a background thread; usable as a context manager.
  `CHAR_SETS` holds the built-in character sets, and `color()` accepts names
  such as `"red"`, `"bold"` or `"fgHiCyan"` (unknown names raise
  `InvalidColorError`).
- `packcli.log` — the `Logger` interface with `FmtLogger` (prints lines) and
  `TestLogger` (forwards lines to a callable); `default()` returns an
  `FmtLogger`.
- `packcli.helper` — `title()` for title casing, and `with_interrupt()`, a
  context manager yielding an event that is set on Ctrl-C (or when a given
  event is set) instead of raising `KeyboardInterrupt`.
- `packcli.filesystem` — `copy_file`, `copy_dir` (recursive, keeps
  permission bits, skips symlinked files) and `maybe_create_destination_dir`;
  failures are logged at debug level and re-raised.
- `packcli.walk` — `walk(root, walk_fn)`, a lexical-order directory walk that
  follows symlinked directories; `walk_fn` may raise `SkipDir`.
- `packcli.templatefuncs` — `to_string_list` renders a list as an HCL-style
  list of quoted strings, `go_quote` quotes values with escapes, and
  `file_contents` reads a file as text.

## Example

```python
from packcli.flags.sets import Sets

sets = Sets()
common = sets.new_set("Common Options")
alpha = common.int_var("alpha", shorthand="a", usage="How many alphas.")
names = common.string_slice_var("name", usage="Names to use.")

sets.parse(["-a", "21", "positional", "--name", "x,y"])
print(alpha.get(), names.get(), sets.args())  # 21 ['x', 'y'] ['positional']
print(sets.help())
```

```python
from packcli.templatefuncs import to_string_list

to_string_list(["dc1", "dc2"])  # '["dc1", "dc2"]'
```

## What it does not do

- There is no command-line program; the package is a library only.
- There is no template engine: `packcli.templatefuncs` supplies helper
  functions, but nothing here parses or renders templates.
- Completion handlers passed to flags are stored and returned by
  `Sets.completions()`, but no shell completion is generated.

## Tests

```
pip install -e ".[test]"
pytest
```