"""
Catalog of attribute names that denote remote commands on a client.

Lookups are case-insensitive, matching how key-value servers treat command
names. The default ``COMMANDS`` catalog holds the Redis command table.
"""

from __future__ import annotations

import typing as t

import structlog

log = structlog.get_logger(__name__)

REDIS_COMMAND_NAMES: frozenset[str] = frozenset(
    {
        "acl", "append", "asking", "auth", "bgrewriteaof", "bgsave", "bitcount",
        "bitfield", "bitfield_ro", "bitop", "bitpos", "blmove", "blmpop", "blpop",
        "brpop", "brpoplpush", "bzmpop", "bzpopmax", "bzpopmin", "client",
        "cluster", "command", "config", "copy", "dbsize", "debug", "decr",
        "decrby", "del", "discard", "dump", "echo", "eval", "eval_ro", "evalsha",
        "evalsha_ro", "exec", "exists", "expire", "expireat", "expiretime",
        "failover", "fcall", "fcall_ro", "flushall", "flushdb", "function",
        "geoadd", "geodist", "geohash", "geopos", "georadius", "georadius_ro",
        "georadiusbymember", "georadiusbymember_ro", "geosearch",
        "geosearchstore", "get", "getbit", "getdel", "getex", "getrange",
        "getset", "hdel", "hello", "hexists", "hget", "hgetall", "hincrby",
        "hincrbyfloat", "hkeys", "hlen", "hmget", "hmset", "hrandfield", "hscan",
        "hset", "hsetnx", "hstrlen", "hvals", "incr", "incrby", "incrbyfloat",
        "info", "keys", "lastsave", "latency", "lcs", "lindex", "linsert", "llen",
        "lmove", "lmpop", "lolwut", "lpop", "lpos", "lpush", "lpushx", "lrange",
        "lrem", "lset", "ltrim", "memory", "mget", "migrate", "module", "monitor",
        "move", "mset", "msetnx", "multi", "object", "persist", "pexpire",
        "pexpireat", "pexpiretime", "pfadd", "pfcount", "pfdebug", "pfmerge",
        "pfselftest", "ping", "psetex", "psubscribe", "psync", "pttl", "publish",
        "pubsub", "punsubscribe", "quit", "randomkey", "readonly", "readwrite",
        "rename", "renamenx", "replconf", "replicaof", "reset", "restore",
        "role", "rpop", "rpoplpush", "rpush", "rpushx", "sadd", "save", "scan",
        "scard", "script", "sdiff", "sdiffstore", "select", "set", "setbit",
        "setex", "setnx", "setrange", "shutdown", "sinter", "sintercard",
        "sinterstore", "sismember", "slaveof", "slowlog", "smembers",
        "smismember", "smove", "sort", "sort_ro", "spop", "spublish",
        "srandmember", "srem", "sscan", "ssubscribe", "strlen", "subscribe",
        "substr", "sunion", "sunionstore", "sunsubscribe", "swapdb", "sync",
        "time", "touch", "ttl", "type", "unlink", "unsubscribe", "unwatch",
        "wait", "waitaof", "watch", "xack", "xadd", "xautoclaim", "xclaim",
        "xdel", "xgroup", "xinfo", "xlen", "xpending", "xrange", "xread",
        "xreadgroup", "xrevrange", "xsetid", "xtrim", "zadd", "zcard", "zcount",
        "zdiff", "zdiffstore", "zincrby", "zinter", "zintercard", "zinterstore",
        "zlexcount", "zmpop", "zmscore", "zpopmax", "zpopmin", "zrandmember",
        "zrange", "zrangebylex", "zrangebyscore", "zrangestore", "zrank", "zrem",
        "zremrangebylex", "zremrangebyrank", "zremrangebyscore", "zrevrange",
        "zrevrangebylex", "zrevrangebyscore", "zrevrank", "zscan", "zscore",
        "zunion", "zunionstore",
    }
)


class CommandCatalog:
    """
    Set of command names a client exposes as remote operations.

    Parameters
    ----------
    names : typing.Iterable[str]
        Initial command names.
    """

    def __init__(self, names: t.Iterable[str] = ()) -> None:
        self._names: set[str] = {name.lower() for name in names}

    def exists(self, name: str) -> bool:
        """
        Tell whether an attribute name denotes a remote command.

        Parameters
        ----------
        name : str
            Attribute name read on a client.

        Returns
        -------
        bool
            ``True`` when the name is a known command.
        """
        return name.lower() in self._names

    def add(self, name: str) -> None:
        """
        Register an extra command, e.g. one a server module provides.

        Parameters
        ----------
        name : str
            Command name to add.
        """
        self._names.add(name.lower())
        log.debug(event="Added command to catalog", command=name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name=name)

    def __iter__(self) -> t.Iterator[str]:
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)


COMMANDS = CommandCatalog(names=REDIS_COMMAND_NAMES)
