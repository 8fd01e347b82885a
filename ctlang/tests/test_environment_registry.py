"""
Tests for scopes, the scope chain and the host registries.
"""
from types import SimpleNamespace

import pytest

from ctlang.environment import Environment, EnvironmentChain
from ctlang.modules import default_natives
from ctlang.nodes import FunctionDef
from ctlang.registry import NativeRegistry, Struct, StructRegistry
from ctlang.structs import default_structs


def test_environment_define_get_set():
    env = Environment()
    assert env.define("x", 1) == 1
    assert env.get("x") == 1
    assert env.set("x", 2) == 2
    assert env.get("x") == 2
    assert env.set("missing", 3) is None
    assert "missing" not in env


def test_chain_lookup_prefers_innermost():
    chain = EnvironmentChain()
    chain.define("x", "outer")
    chain.push()
    chain.define("x", "inner")
    assert chain.lookup("x").get("x") == "inner"
    chain.pop()
    assert chain.lookup("x").get("x") == "outer"
    assert chain.lookup("y") is None
    assert not chain.contains("y")


def test_global_scope_cannot_be_popped():
    chain = EnvironmentChain()
    with pytest.raises(IndexError):
        chain.pop()


def test_scope_is_popped_on_error():
    chain = EnvironmentChain()
    with pytest.raises(RuntimeError):
        with chain.scope(Environment({"a": 1})):
            assert len(chain) == 2
            assert chain.innermost.get("a") == 1
            raise RuntimeError("leave block")
    assert len(chain) == 1


def test_native_registry_from_modules():
    first = SimpleNamespace(EXPORTS=[("double", lambda args: args[0] * 2)])
    second = SimpleNamespace(EXPORTS=[("double", lambda args: args[0] * 3), ("zero", lambda args: 0)])
    registry = NativeRegistry.from_modules([first, second])
    assert "double" in registry
    assert registry.contains("zero")
    assert registry.execute("double", [2]) == 6
    assert registry.execute("missing", []) is None
    assert registry.names() == ["double", "zero"]


def test_struct_prototype_is_read_only():
    struct = Struct({"x": 1})
    assert struct.get("x") == 1
    assert struct.get("y") is None
    assert struct.constructor.name == "constructor"
    assert struct.constructor.header.return_type == "this"
    with pytest.raises(TypeError):
        struct.prototype["y"] = 2


def test_struct_registry():
    registry = StructRegistry({"int": Struct({})})
    assert "int" in registry
    assert registry.get("float") is None
    assert registry.names() == ["int"]


def test_default_registries():
    natives = default_natives()
    assert sorted(natives.names()) == ["flush", "input", "len", "print", "read_file"]

    structs = default_structs()
    member = structs.get("String").get("len")
    assert isinstance(member, FunctionDef)
    assert member.params == ("s",)
