# sensorlink

sensorlink is a small temperature and humidity monitor that works over TCP.
A node runs in one of two roles.

- **client**: once per second it makes a simulated sensor reading and sends it
  to a server as a fixed-size binary package. Temperature starts at a random
  value in -10..40 and moves by at most 2 per reading, clamped to -10..40.
  Humidity starts in 30..100 and moves the same way, clamped to -30..100.
- **server**: listens on all interfaces and accepts any number of clients,
  each handled in its own thread. Every complete package it receives is
  stored in the SQLite database `./view/data.db`, in a table named `data`
  with the columns `no`, `id`, `temperature`, `humidity` and `time`.

The database file and its directory are created when a node starts, in either
role.

## Installation

```
pip install .
```

## Usage

Start a server on the default port, 30080:

```
sensorlink --server
```

Start a client that reports as sensor 7 to a server on another host:

```
sensorlink --client --ip 192.0.2.10 --port 30080 --id 7
```

Options:

| Option             | Meaning                                      | Default     |
|--------------------|----------------------------------------------|-------------|
| `--server`, `-S`   | run as the collecting server                 |             |
| `--client`, `-C`   | run as a reporting client                    |             |
| `--ip`, `-I`       | server address the client connects to        | `127.0.0.1` |
| `--port`, `-P`     | server port                                  | `30080`     |
| `--id`, `-ID`      | sensor id carried in every package           | `0`         |

If both `--server` and `--client` are given, the last one wins. The numbers
for `--port` and `--id` are read from their leading digits, so `--port 80x`
means port 80 and a value with no digits means 0. Arguments that are not
options are ignored.

The usage text is printed and the exit status is 1 when no arguments are
given or when an option is missing its value. A socket error, for example a
refused connection, is printed to standard error and the exit status is 1.
Press Ctrl+C to stop either role.

## Library use

```python
from sensorlink.package import Package
from sensorlink.storage import Storage

pkg = Package(id=1, temperature=21, humidity=55, time=1700000000)
data = pkg.to_bytes()            # Package.SIZE bytes
assert Package.from_bytes(data) == pkg
print(pkg.describe())

with Storage("./view/data.db") as store:
    store.insert(pkg)
    print(store.rows())          # [(no, id, temperature, humidity, time), ...]
```

- `sensorlink.package.Package`: a reading, with `to_bytes`, `from_bytes` and
  `describe`.
- `sensorlink.storage.Storage`: the `data` table, with `insert`, `rows` and
  `close`. `ensure_database(path)` creates a database file and its directory
  if they are missing.
- `sensorlink.client.Config` and `sensorlink.client.Client`: a node.
  `Client` has `connect`, `bind`, `send`, `make_reports(count=None)`,
  `listen`, `handle_connection`, `exec` and `close`, and works as a context
  manager. `Config.report_interval` sets the seconds between readings.
  Socket failures raise `ConnectionError`.
- `sensorlink.utils`: `Mode`, `str_to_int`, `contains`, `random_between`,
  `rangify`, `print_line` and `info`.
- `sensorlink.cli`: `usage`, `parse_args` and `main`, the function the
  `sensorlink` command runs.

## What it does not do

The server only stores readings. It does not serve a web page or any other
view of the data, and it does not open a browser. To read the collected data,
open `./view/data.db` with any SQLite tool or call `Storage.rows()`. Readings
are simulated; sensorlink does not read from real sensor hardware.