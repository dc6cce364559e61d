"""Portable verifier path: a wasm-bindgen WebAssembly module hosted by wasmtime.

The module exports one verify function,

    verify_stark(proof_bytes: &[u8], vk_bytes: &[u8]) -> Result<bool, JsValue>

compiled through wasm-bindgen. Without the generated JS glue we reproduce the
small part of its ABI this call needs:

- byte slices are copied into linear memory via __wbindgen_malloc(len, 1) and
  passed as (ptr, len) pairs;
- the Result comes back either as a multi-value (ok, err, is_err) triple
  (externref builds) or through a 16-byte return area reserved with
  __wbindgen_add_to_stack_pointer (legacy builds);
- every import the module declares gets a stub. Stubs that build strings or
  throw decode their (ptr, len) argument from memory; console output is
  forwarded to logging; everything else returns zeros.

Instantiation is the only asynchronous step in a harness run: compiling the
module runs in a worker thread and is awaited.
"""

import asyncio
import logging
import struct
from pathlib import Path
from typing import Any, Callable, Optional, Union

from wasmtime import (
    Engine,
    Func,
    FuncType,
    Instance,
    Memory,
    Module,
    Store,
    Trap,
    ValType,
    WasmtimeError,
)

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_POINT = "verify_stark"
MALLOC_EXPORT = "__wbindgen_malloc"
STACK_POINTER_EXPORT = "__wbindgen_add_to_stack_pointer"
START_EXPORT = "__wbindgen_start"
MEMORY_EXPORT = "memory"

RETURN_AREA_SIZE = 16
# JS glue reserves the low heap slots for undefined/null/true/false
HEAP_BASE = 132


class ModuleLoadFailure(RuntimeError):
    """The portable verifier module could not be read, compiled or instantiated."""


class PortableVerifyError(RuntimeError):
    """The portable verify call returned an error value instead of a verdict."""


# What a running module can raise back into Python
WASM_CALL_ERRORS = (PortableVerifyError, Trap, WasmtimeError)


def _zero(vt: ValType) -> Any:
    if vt == ValType.i32() or vt == ValType.i64():
        return 0
    if vt == ValType.f32() or vt == ValType.f64():
        return 0.0
    return None


def _pack_results(values: list[Any]) -> Any:
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return tuple(values)


class PortableVerifier:
    """An instantiated verifier module. Safe to call repeatedly."""

    def __init__(self, module: Module, engine: Engine, entry_point: str = DEFAULT_ENTRY_POINT) -> None:
        self.entry_point = entry_point
        self._store = Store(engine)
        self._memory: Optional[Memory] = None
        self._objects: dict[int, Any] = {}
        self._next_handle = HEAP_BASE

        imports = [self._stub_import(imp) for imp in module.imports]
        try:
            instance = Instance(self._store, module, imports)
        except WASM_CALL_ERRORS as e:
            raise ModuleLoadFailure(f"cannot instantiate verifier module: {e}") from e

        exports = instance.exports(self._store)
        memory = exports.get(MEMORY_EXPORT)
        if not isinstance(memory, Memory):
            raise ModuleLoadFailure(f"verifier module does not export '{MEMORY_EXPORT}'")
        self._memory = memory
        self._malloc = self._export_func(exports, MALLOC_EXPORT)
        self._verify = self._export_func(exports, entry_point)
        self._stack_pointer = exports.get(STACK_POINTER_EXPORT)

        verify_type = self._verify.type(self._store)
        n_params = len(verify_type.params)
        n_results = len(verify_type.results)
        if n_params == 4 and n_results == 3:
            self._legacy_abi = False
        elif n_params == 5 and n_results == 0 and isinstance(self._stack_pointer, Func):
            self._legacy_abi = True
        else:
            raise ModuleLoadFailure(
                f"unsupported signature for '{entry_point}': "
                f"{n_params} params, {n_results} results"
            )

        start = exports.get(START_EXPORT)
        if isinstance(start, Func):
            try:
                start(self._store)
            except WASM_CALL_ERRORS as e:
                raise ModuleLoadFailure(f"verifier module start function failed: {e}") from e

    # --- Loading ---

    @classmethod
    def from_bytes(cls, wasm: bytes, entry_point: str = DEFAULT_ENTRY_POINT) -> "PortableVerifier":
        engine = Engine()
        try:
            module = Module(engine, wasm)
        except WasmtimeError as e:
            raise ModuleLoadFailure(f"cannot compile verifier module: {e}") from e
        return cls(module, engine, entry_point)

    @classmethod
    def from_file(cls, path: Union[str, Path], entry_point: str = DEFAULT_ENTRY_POINT) -> "PortableVerifier":
        path = Path(path)
        try:
            wasm = path.read_bytes()
        except OSError as e:
            raise ModuleLoadFailure(f"cannot read verifier module {path}: {e.strerror or e}") from e
        logger.info("loading portable verifier %s (%d bytes)", path, len(wasm))
        return cls.from_bytes(wasm, entry_point)

    def _export_func(self, exports: Any, name: str) -> Func:
        func = exports.get(name)
        if not isinstance(func, Func):
            raise ModuleLoadFailure(f"verifier module does not export function '{name}'")
        return func

    # --- Host Imports ---

    def _read_string(self, caller: Any, ptr: int, length: int) -> str:
        assert self._memory is not None
        ptr &= 0xFFFFFFFF
        raw = self._memory.read(caller, ptr, ptr + length)
        return bytes(raw).decode("utf-8", errors="replace")

    def _hold(self, obj: Any) -> int:
        handle = self._next_handle
        self._objects[handle] = obj
        self._next_handle += 1
        return handle

    def _stub_import(self, imp: Any) -> Func:
        ty = imp.type
        if not isinstance(ty, FuncType):
            raise ModuleLoadFailure(
                f"unsupported non-function import {imp.module}.{imp.name}"
            )
        params = list(ty.params)
        results = list(ty.results)
        name = imp.name or ""
        takes_string = len(params) >= 2 and params[0] == ValType.i32() and params[1] == ValType.i32()

        handler: Callable[..., Any]
        if "string_new" in name and takes_string and len(results) == 1:
            returns_ref = results[0] == ValType.externref()

            def handler(caller: Any, ptr: int, length: int, *_: Any) -> Any:
                text = self._read_string(caller, ptr, length)
                return text if returns_ref else self._hold(text)
        elif "throw" in name and takes_string:
            def handler(caller: Any, ptr: int, length: int, *_: Any) -> Any:
                raise PortableVerifyError(self._read_string(caller, ptr, length))
        elif ("log" in name or "error" in name) and takes_string and len(params) == 2 and not results:
            def handler(caller: Any, ptr: int, length: int) -> Any:
                logger.info("[wasm] %s", self._read_string(caller, ptr, length))
        else:
            zeros = [_zero(r) for r in results]

            def handler(caller: Any, *args: Any) -> Any:
                logger.debug("[wasm] stub import %s.%s%r", imp.module, name, args)
                return _pack_results(zeros)

        return Func(self._store, ty, handler, access_caller=True)

    # --- Verification ---

    def _pass_bytes(self, data: bytes) -> tuple[int, int]:
        assert self._memory is not None
        ptr = self._malloc(self._store, len(data), 1) & 0xFFFFFFFF
        self._memory.write(self._store, bytes(data), ptr)
        return ptr, len(data)

    def _take_error(self, err: Any) -> str:
        if isinstance(err, int):
            err = self._objects.pop(err, f"<error object {err}>")
        return str(err)

    def verify(self, proof_bytes: bytes, vk_bytes: bytes) -> bool:
        """Call the verify entry point. Raises PortableVerifyError on an error result."""
        ptr0, len0 = self._pass_bytes(proof_bytes)
        ptr1, len1 = self._pass_bytes(vk_bytes)

        if not self._legacy_abi:
            ok, err, is_err = self._verify(self._store, ptr0, len0, ptr1, len1)
        else:
            assert self._memory is not None
            retptr = self._stack_pointer(self._store, -RETURN_AREA_SIZE)
            try:
                self._verify(self._store, retptr, ptr0, len0, ptr1, len1)
                area = self._memory.read(self._store, retptr & 0xFFFFFFFF, (retptr & 0xFFFFFFFF) + 12)
                ok, err, is_err = struct.unpack("<iii", bytes(area))
            finally:
                self._stack_pointer(self._store, RETURN_AREA_SIZE)

        if is_err:
            raise PortableVerifyError(self._take_error(err))
        return ok != 0


async def load_portable_verifier(
    path: Union[str, Path], entry_point: str = DEFAULT_ENTRY_POINT
) -> PortableVerifier:
    """Read, compile and instantiate the verifier module off the event loop."""
    return await asyncio.to_thread(PortableVerifier.from_file, path, entry_point)
