# gost

Building blocks for threaded Python programs: a growable byte buffer, pools
of reusable buffers, a size-bounded LRU cache, several queues, a growing
channel and a few synchronisation helpers. Everything is written with the
standard library only.

## Modules

| Module | Provides |
| --- | --- |
| `gost.buffer` | `Buffer`, a growable byte buffer for reading and writing, and `TooLargeError` |
| `gost.pools` | `ByteSlice`, `ObjectPool`, `BytesPool`, `SlicePool` and the helpers `get_bytes_buffer`, `put_bytes_buffer`, `acquire_bytes`, `release_bytes`, `set_default_bytes_pool`, `get_bytes`, `put_bytes` |
| `gost.bucketpool` | `BucketPool`, byte slices kept in buckets whose capacities double |
| `gost.values_context` | `ValuesContext`, a mutable key/value store |
| `gost.hashset` | `HashSet`, whose `add`, `remove` and `contains` take any number of items |
| `gost.lru` | `LRUCache`, bounded by the total size of its values, with `Item` and `CacheStats` |
| `gost.consolidator` | `Consolidator`, `Result`, `ConsolidatorCache` and `ConsolidatorCacheItem` |
| `gost.batcher` | `Batcher`, which groups concurrent callers into numbered batches |
| `gost.semaphore` | `Semaphore`, a counting semaphore with an optional timeout |
| `gost.circular_queue` | `CircularUnboundedQueue`, a ring buffer that grows, optionally up to a quota |
| `gost.unbounded_chan` | `UnboundedChan`, a thread-safe channel that grows as needed, and `ChanClosedError` |
| `gost.spmc_queue` | `SPMCLockFreeQueue`, a fixed-size queue pushed and popped at the head, popped at the tail |
| `gost.blocking_queue` | `Queue`, a disposable blocking queue, with `DisposedError`, `QueueTimeoutError`, `EmptyQueueError` and `execute_in_parallel` |

## Installation

```
pip install .
```

## Usage

### Byte buffer

```python
from gost.buffer import Buffer

buf = Buffer()
buf.write_string("hello\nworld")
print(buf.read_string("\n"))   # 'hello\n'
print(buf.read_string("\n"))   # 'world' (no delimiter left, rest returned)
```

`read` returns `b""` once the buffer is drained, `read_byte` and `read_rune`
raise `EOFError`, and `unread_byte` / `unread_rune` raise `ValueError` when the
previous operation was not a matching read. `write_next_begin(n)` returns a
writable `memoryview` of reserved space; `write_next_end(n)` commits the bytes
written into it.

### Pools

```python
from gost.pools import SlicePool, acquire_bytes, release_bytes

pool = SlicePool()            # slots of 64 B, 128 B, ... 256 KiB
buf = pool.get(100)           # len(buf) == 100, buf.cap() == 128
pool.put(buf)

data = acquire_bytes(1000)    # from the default pool (512 B ... 64 KiB slots)
release_bytes(data)
```

A request larger than the biggest slot of a `BytesPool` returns a fresh
`ByteSlice` of length 0 and capacity `size`; slices whose capacity matches no
slot are dropped on release. `BucketPool(min_size, max_size).get(size)`
instead returns a slice of length `size`, exactly that large when no bucket
fits.

### LRU cache

```python
from gost.lru import LRUCache

class Blob:
    def __init__(self, n):
        self.n = n
    def size(self):
        return self.n

cache = LRUCache(3)
cache.set("a", Blob(1))
cache.set("b", Blob(2))
cache.get("a")
cache.set("c", Blob(1))       # total size 4 > 3: "b" is evicted
print(cache.keys())           # ['c', 'a']
print(cache.stats_json())
```

Every value must have a `size()` method; the capacity limits the total of these
sizes, not the number of entries.

### Consolidating duplicate work

```python
from gost.consolidator import Consolidator

con = Consolidator()
result, created = con.create("select 1")
if created:
    result.result = 42
    result.broadcast()
else:
    result.wait()             # counts the duplicate, then waits
print(con.items())
```

### Unbounded channel

```python
from gost.unbounded_chan import UnboundedChan

ch = UnboundedChan(300)
for i in range(1000):
    ch.put(i)
ch.close()
print(sum(ch))
```

With a non-zero `quota`, `put` blocks (or raises `queue.Full` when `block` is
false or the timeout passes) once the channel is full. `get` raises
`queue.Empty` likewise, and `ChanClosedError` once the channel is closed and
drained.

### Blocking queue

```python
from gost.blocking_queue import Queue, QueueTimeoutError

q = Queue(10)
q.put("a", "b", "c")
print(q.get(2))               # ['a', 'b']
print(q.poll(1, 0.01))        # ['c']
try:
    q.poll(1, 0.01)
except QueueTimeoutError:
    pass
```

### Semaphore and batcher

```python
from gost.semaphore import Semaphore
from gost.batcher import Batcher

sem = Semaphore(2, timeout=0.5)   # seconds; 0 waits forever
with sem:
    ...

batcher = Batcher(0.05)
batch_id = batcher.wait()         # callers arriving within 50 ms share an id
```

## Limits

This is a library only: it has no command-line tool. `SPMCLockFreeQueue`
keeps the single-producer, multi-consumer interface but is guarded by a lock
rather than being lock-free. `CircularUnboundedQueue` is not thread-safe.

## Running the tests

```
pip install ".[test]"
pytest
```