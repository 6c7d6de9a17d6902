# gamehub

Building blocks for a TCP multiplayer game server, plus tooling that turns
design data and table definitions into configuration records and a MySQL
schema.

## Installing

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## What is inside

| Module | Purpose |
| --- | --- |
| `gamehub.logger` | Leveled file loggers (`Logger`, `LogLevel`) with size-based rotation, shared per file via `get_logger`; `init_null` and `init_types` (the system/net/db/rpc set as `Loggers`) |
| `gamehub.bytebuffer` | Little-endian `ByteBuffer` with `mark`/`reset_mark`; short reads raise `BufferUnderflowError` |
| `gamehub.ringbuffer` | Fixed-capacity `RingBuffer` with selectable `ByteOrder`, typed reads and writes with optional timeouts, length-prefixed bytes and strings; `new_capacity` for growth sizes |
| `gamehub.unique_list` | `UniqueList`, an ordered list that never holds duplicates |
| `gamehub.timeutils` | Server clock with an adjustable offset (`now_millis`, `set_offset`, `clear_offset`, `now_string`, `is_same_day`), `to_json`/`from_json`, `struct_to_bytes`/`bytes_to_struct` |
| `gamehub.tasks` | `Task` and `TaskScheduler` for repeating background work |
| `gamehub.codec` | `Package`, `create_package` and `PackageCodec`, the wire format of packets |
| `gamehub.filters` | `FilterChain` with `DefaultFilter` and `IpFilter` for incoming packets |
| `gamehub.handlers` | `HandlerRegistry` mapping command ids to handlers; unknown ids raise `HandlerNotFoundError` |
| `gamehub.rediskeys` | `RedisKey` templates (`GAME_SERVER_STATUS`, `PLAYER_SERVER_ID`) |
| `gamehub.cache_service` | `TableCacheService`, calling registered save functions on a timer |
| `gamehub.events` | `EventType` and `EventProcess` for player events |
| `gamehub.context` | `ServerType`, `RunModule`, YAML server configuration (`parse_server_config`), `ServerContext` and the `NodeRegistry` of peer servers |
| `gamehub.config_store`, `gamehub.config_tables` | Reloadable config tables read from exported `.txt` files, gathered by `ConfigManager` |
| `gamehub.excel_export` | Turning spreadsheet rows into table definitions and JSON record lines (`parse_rows`, `build_json_lines`, `render_struct_fields`, `byte_size`) |
| `gamehub.extcode` | `scan_custom_block`, recovering hand-written blocks between markers in a file |
| `gamehub.table_schema` | Reads table `.proto` definitions and produces MySQL DDL |
| `gamehub.proto_scan` | Reads message and command `.proto` files and pairs request (`cs`) and response (`sc`) messages with command ids |

## Packets

```python
from gamehub.bytebuffer import ByteBuffer
from gamehub.codec import PackageCodec, create_package

codec = PackageCodec()
package = create_package(100, 1, 1700000000, 7, b"payload")

buffer = ByteBuffer()
buffer.write_bytes(codec.encode(package))
decoded = codec.decode(buffer)
```

`decode` returns `None` and puts the read position back when a whole packet
has not arrived yet, so it can be called again after more bytes are written.

## Config tables

Exported tables are files of JSON records separated by a tab and a CRLF.
`ConfigManager().load(path)` reads the tables `activitypassaward`,
`activityNpcGroup`, `server`, `activityNpc` and `activityInfo` from one
directory, in that order, and raises `ConfigLoadError` at the first file that
is missing or holds a bad record. `ConfigManager.table(name)` returns a table,
whose `current()` view gives records in file order and by id with
`get(record_id)`. Loading again swaps in a new view; views already handed out
do not change.

## Database schema from proto files

```
gamehub-tables path/to/proto/table
```

Scans the `.proto` files under the given directory (the current directory if
none is given) and writes `Init.sql` into `../script/sql` relative to that
directory, which must already exist. Each message named like its file gets a
`CREATE TABLE` statement for its first field and an `ALTER TABLE ... ADD
COLUMN` for each further field. A `len[N]` marker in a string field's comment
sets its `varchar` length (255 by default); `len[text]` makes it a `text`
column. Non-scalar fields become `mediumblob` columns.

## What this package does not do

It has no network server or client: there is no listener, no connection
handling and no RPC transport, only the packet format, filters and handler
registry such a server would use. It does not connect to MySQL or Redis;
`TableCacheService` only calls the save functions it is given, and `rediskeys`
only builds key strings. There is no service-discovery client; `NodeRegistry`
takes instance descriptions it is handed. `excel_export` works on rows already
read from a spreadsheet and does not open `.xlsx` files or write output files,
and nothing here generates source code.

## Running the tests

```
pytest
```