# unixkit

unixkit is a set of small Unix tools in one package:

- **wifistats**, a command that adds up the bytes sent or received by each
  WiFi device in a packet capture, optionally grouped by hardware vendor.
- **A shell executor** that runs a command tree you build from
  `ShellCmd` nodes: commands, `;`, `&&`, `||`, subshells, pipes, background
  jobs, `<`, `>` and `>>` redirection, and the built-ins `cd`, `exit` and
  `time`.
- **The containers** these tools use: an open-addressing hash map, an
  integer set and a small fixed-size string map, plus path helpers.

unixkit needs Python 3.10 or later and a POSIX system (the executor uses
`os.fork`, pipes and signals). It has no third-party dependencies.

## Installation

```
pip install .
```

To install the test tools as well and run the tests:

```
pip install ".[test]"
pytest
```

## wifistats

```
wifistats t packets.txt
wifistats r packets.txt ouis.txt
```

The first argument says what to report; only its first character counts:

- `t` reports on transmitters.
- `r` reports on receivers.

Anything else, or the wrong number of arguments, prints a message on
standard error and exits with status 1. So does a file that cannot be
opened or a malformed address.

### The packet file

One packet per line, four tab-separated fields: capture time, transmitter
MAC address, receiver MAC address and packet length in bytes.

```
1500000000.000001	02:00:00:00:00:01	02:00:00:00:00:02	1500
1500000000.000002	02:00:00:00:00:01	ff:ff:ff:ff:ff:ff	60
```

Packets sent to the broadcast address `ff:ff:ff:ff:ff:ff` are not counted.
At most 500 distinct addresses are accepted; a 501st is an error. Each
address byte must be exactly two hex digits.

### Device report

Without an OUI file, wifistats prints one line per device: the address in
upper-case hex, a tab, and the total bytes.

```
02:00:00:00:00:01	1500
```

### Vendor report

With an OUI file, addresses are cut to their first three bytes and looked
up in the vendor list. The OUI file has two tab-separated fields per line:
the prefix, written with `:` or `-`, and the vendor name, which may contain
spaces. The first name given for a prefix is kept, and names are cut to 90
characters. At most 500 distinct prefixes are read.

The vendor report has three columns: prefix, vendor name and bytes. Bytes
from prefixes not in the file are added up on one final line:

```
02:00:00	Example Devices Inc	1500
??:??:??	UNKNOWN-VENDOR	0
```

### Ordering and timing

Lines are sorted in Python by byte count, largest first; ties fall back to
dictionary order (letters, digits and blanks only) and then to plain string
order. After the report, wifistats prints `Time taken: ... seconds` with the
CPU time used.

### From Python

The same steps are functions in `unixkit.wifistats`. `parse_request` takes
the arguments without the program name:

```python
from unixkit.wifistats import (
    collect_macs,
    create_report,
    format_report,
    load_vendors,
    parse_request,
    sort_report,
)

request = parse_request(["r", "packets.txt", "ouis.txt"])
macs = collect_macs(request)               # {address: bytes}
vendors = load_vendors(request.ouis_filename)
report = create_report(macs, vendors, request)
for line in sort_report(format_report(report, request), request):
    print(line)
```

Addresses are integers with the first byte least significant. Lower-level
helpers:

- `parse_packet` and `parse_vendor` read a single line.
- `parse_address` and `parse_hex_byte` read an address or one byte.
- `is_broadcast` tests for the broadcast address.

Invalid input raises `WifiStatsError`. `main(argv=None)` is the command's
entry point and returns its exit status.

## The shell executor

`unixkit.executor.Executor` runs `unixkit.shellcmd.ShellCmd` trees. Its
settings come from `ShellEnvironment`; `ShellEnvironment.from_environ(environ,
argv0)` reads them from a mapping, with these defaults:

| Variable | Default |
| --- | --- |
| `HOME` | `/tmp` |
| `PATH` | `/bin:/usr/bin:/usr/local/bin:.` |
| `CDPATH` | `.:..` |

```python
import os
import sys

from unixkit.executor import Executor, ShellExit
from unixkit.shellcmd import CmdType, ShellCmd, ShellEnvironment, format_shellcmd

env = ShellEnvironment.from_environ(os.environ, sys.argv[0])
executor = Executor(env)

tree = ShellCmd(
    CmdType.AND,
    left=ShellCmd(CmdType.COMMAND, ["echo", "hello"], outfile="out.txt"),
    right=ShellCmd(CmdType.COMMAND, ["cat", "out.txt"]),
)
print(format_shellcmd(tree))
try:
    status = executor.execute(tree)
except ShellExit as request:
    status = request.status
```

`Executor.execute` returns the exit status of the tree and keeps the last
status in `executor.exitstatus`.

- Commands without a `/` are looked up along `PATH`. A program that cannot
  be started but names an existing `.sh` file is run as a script: the
  program named by `argv0` is started with the script on its standard input.
- `cd` with no argument goes to `HOME`; a relative argument is looked up
  along `CDPATH`.
- `time` runs the rest of its arguments (or its left subtree) and reports
  the elapsed milliseconds on standard error.
- `exit` stops background jobs and raises `ShellExit`, carrying status 0 or
  1 when given as the argument, otherwise the last status.
- Subshells and both sides of a pipe run in forked child processes; the
  right side of a pipe only runs if the left side succeeded.
- Background jobs are tracked in an `IntSet`; `reap_background` collects
  finished ones and `terminate_background` sends them `SIGTERM`.

`unixkit.redirection.redirect(t, env)` is a context manager that applies a
node's redirections, resolving relative file names with `resolve_target`
along `CDPATH`. It raises `RedirectionError` for a file it cannot open;
`execute` reports that error on standard error and returns 1.

### What the executor does not do

unixkit does not read or parse shell command lines and has no interactive
shell command. Command trees must be built in Python from `ShellCmd` nodes.

## Containers and path helpers

```python
from unixkit.hashmap import HashMap
from unixkit.intset import IntSet
from unixkit.searchpath import searchpath
from unixkit.simplemap import SimpleMap

pids = IntSet(8)
pids.add(4242)
assert 4242 in pids and len(pids) == 1
pids.remove(4242)

commands = SimpleMap()
commands.insert("cd", 1)
assert commands.get("cd", 0) == 1

sort_path = searchpath("/bin:/usr/bin", "sort")  # None when not found
```

- `HashMap(capacity, key, hash_key)` is a fixed-capacity table storing whole
  records. `key` maps a record to its key (the record itself when None) and
  `hash_key` hashes a key. `insert` returns `(node, inserted)`, `remove`
  raises `KeyError` for a missing key, and `resize` rebuilds the table.
- `IntSet` grows and shrinks on its own; `remove` raises `KeyError` for a
  missing value.
- `SimpleMap` has seven slots and raises `KeyCollisionError` when a new key
  lands in a slot already in use.
- `unixkit.filepaths` provides `join_paths`, `append_filename`,
  `get_parent_directory`, `get_filename`, `normalize_path`,
  `get_absolute_path`, `is_absolute_path`, `path_exists`, `file_exists`,
  `directory_exists` and `get_file_extension`.