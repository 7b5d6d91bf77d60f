# hackcon

Building blocks for a hackable emulator console, usable as a plain library.
It has no dependencies outside the standard library.

## Modules

- `hackcon.memory`: the abstract `Memory` interface for byte-addressable
  regions (`id`, `name`, `base`, `size`, `readonly`, `peek`, `poke`), with
  `required_digits()`, `find(data, start=0)` (returns an offset or `None`) and
  the bounds-checked `read` / `write`, which raise `AddressOutOfBounds`.
  `DebugMemory` is a small region of counters, random bytes and a fixed
  pattern that changes on `tick()`. `MemorySelector` keeps the known regions
  and hands out integer handles; `get(memory_id)` returns a `MemoryHandle`
  that reads through its handle, or raises `UnknownMemory`. After
  `reset()` every handle is invalid and a `MemoryHandle` reads as an empty,
  read-only region named `(invalid)`. `format_u64` formats an address as hex
  padded to 4, 8 or 16 digits.
- `hackcon.snapshot`: `take_snapshot(memory)` copies a region into a
  read-only `Snapshot` with a unique id (`snap1`, `snap2`, ...) and a name
  holding a UTC timestamp.
- `hackcon.addrset`: `AddressSet`, a sorted set of addresses that may be
  stored as a complement, with `union` (`|`), `intersection` (`&`),
  `difference` (`-`) and `complement` (`~`). `len()` and iteration cover the
  stored elements; `size_in(universal_size)` counts members in a universe of
  a given size.
- `hackcon.filter`: `filter_signed` and `filter_unsigned` compare the values
  in a region with an integer constant or with another region of the same
  base and size (a snapshot, for example). Values are 1, 2, 4 or 8 bytes wide,
  `Endianness.LITTLE` or `Endianness.BIG`, compared with an `Operator`; the
  result is an `AddressSet`.
- `hackcon.cheats`: `filter_memory(memory, op, other, settings)` accepts an
  operator string (`"<"`, `"<="`, `">"`, `">="`, `"=="`, `"~="`) and a compact
  settings string: signedness `s`/`u`, size `b`/`w`/`d`/`q`, and for sizes
  above one byte endianness `l`/`b` (for example `"ub"`, `"swl"`, `"udb"`).
  `parse_settings` and `parse_operator` raise `ValueError` on bad input.
- `hackcon.z80`: Z80 instruction lengths, cycle counts and flag effects
  (`instruction_info`, `instruction_length`, `cycles_text`, `tooltip`) for
  any object with a `peek(address)` method.
- `hackcon.lifecycle`: the `LifeCycle` state machine over `State`, which
  forwards loading, starting, pausing, resuming, stepping, resetting and
  unloading to a context object and returns `True` only when it switched state.
- `hackcon.timer`: `Timer`, a pausable microsecond stopwatch with an
  injectable clock.
- `hackcon.perf`: `Perf`, named performance counters (`register_ident`,
  `start`, `stop`, `format_lines`, `log`) plus `get_time_us` / `get_time_ns`.
- `hackcon.logger`: `Logger`, a thread-safe log bounded by a number of
  characters; non-debug messages are also written to a stream (stderr by
  default) and `copy_text()` renders the stored lines with level labels.
- `hackcon.fnkdat`: `fnkdat(target, flags, package)` works out the
  conventional per-user, configuration, data and variable-data paths for a
  package (POSIX layout), and with `FnkdatFlag.CREAT` creates their
  directories via `make_dirs`.

## Example: a cheat search

```python
from hackcon.memory import MemorySelector
from hackcon.snapshot import take_snapshot
from hackcon.cheats import filter_memory

selector = MemorySelector(debug=True)
ram = selector.get("debug")

before = take_snapshot(ram)
selector.tick()
changed = filter_memory(ram, "~=", before, "ub")
print(sorted(changed))
```

## What this package does not do

It is a library only. It has no command, no windows or drawing, no video or
audio output, no loading of emulator cores or games (the `LifeCycle` context
is yours to supply), no disassembler text for Z80 instructions, and no
scripting interface.

## Running the tests

```
pip install -e .[test]
pytest
```