"""Declarative catalogue of daemon RPC methods.

CALLSPEC maps each method name to a whitespace-separated list of parameter
shapes. It must stay in lockstep with the daemon's API. Shape tokens:

    str, int, bool, float     scalar of that type
    str?                      optional slot (pass None to leave it unset)
    str|str                   one slot accepting either form
    {key:value,...}           JSON object
    [item,...]                JSON array

Every token is one positional slot, and every slot counts toward the
method's arity. The table is parsed once at import into CATALOGUE, a
read-only mapping shared by all clients. bind_catalogue() turns it into one
method per entry on a class.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeVar

from divirpc.core.errors import CatalogueError, UnknownMethodError

CALLSPEC: dict[str, str] = {
    # == Addressindex ==
    "getaddressbalance": "str|str bool",
    "getaddressdeltas": "str|str bool",
    "getaddresstxids": "str|str bool",
    "getaddressutxos": "str|str bool",

    # == Blockchain ==
    "getbestblockhash": "",
    "getblock": "str bool",
    "getblockchaininfo": "",
    "getblockcount": "",
    "getblockhash": "int",
    "getblockheader": "str bool",
    "getchaintips": "",
    "getdifficulty": "",
    "getlotteryblockwinners": "int?",
    "getmempoolinfo": "",
    "getrawmempool": "bool",
    "getspentinfo": "{txid:,index:}",
    "gettxout": "str int bool",
    "gettxoutsetinfo": "",
    "reverseblocktransactions": "str",
    "verifychain": "int?",

    # == Control ==
    "getinfo": "",
    "help": "str?",
    "stop": "",

    # == Divi ==
    "ban": "str",
    "clearbanned": "",
    "spork": "str str?",

    # == Vault ==
    "addvault": "str str",
    "fundvault": "str int",
    "reclaimvaultfunds": "str float str?",
    "removevault": "str",

    # == Masternode == (deprecated)
    "mnsync": "str",

    # == Mining ==
    "getmininginfo": "",
    "prioritisetransaction": "str int int",

    # == Network ==
    "addnode": "str str",
    "getaddednodeinfo": "bool str",
    "getconnectioncount": "",
    "getnettotals": "",
    "getnetworkinfo": "",
    "getpeerinfo": "",
    "ping": "",

    # == Rawtransactions ==
    "createrawtransaction": "[{txid:id,vout:n},...] {address:amount,...}",
    "decoderawtransaction": "str",
    "decodescript": "str",
    "getrawtransaction": "str bool",
    "sendrawtransaction": "str bool",
    "signrawtransaction": (
        "str [{txid:id,vout:n,scriptPubKey:hex,redeemScript:hex},...] [privatekey1,...] str"
    ),

    # == Util ==
    "createmultisig": "int [str,...]",
    "validateaddress": "str",
    "verifymessage": "str str str",

    # == Wallet ==
    "addmultisigaddress": "int [str,...] str",
    "backupwallet": "str",
    "bip38decrypt": "str",
    "bip38encrypt": "str str",
    "debitvaultbyname": "str str float str?",
    "dumphdinfo": "",
    "dumpprivkey": "str",
    "encryptwallet": "str",
    "getaccount": "str",
    "getaccountaddress": "str",
    "getaddressesbyaccount": "str",
    "getbalance": "str int bool",
    "getinvalid": "",
    "getnewaddress": "str?",
    "getrawchangeaddress": "",
    "getreceivedbyaccount": "str int",
    "getreceivedbyaddress": "str int",
    "getstakingstatus": "",
    "gettransaction": "str bool",
    "getunconfirmedbalance": "",
    "getwalletinfo": "",
    "importaddress": "str str bool",
    "importprivkey": "str str bool",
    "keypoolrefill": "int",
    "listaccounts": "int bool",
    "listlockunspent": "",
    "listreceivedbyaccount": "int bool bool",
    "listreceivedbyaddress": "int bool bool",
    "listsinceblock": "str int bool",
    "listtransactions": "str int int bool",
    "listunspent": "int int [str,...]",
    "loadwallet": "str",
    "lockunspent": "bool [{txid:txid,vout:n},...]",
    "sendfrom": "str str int str str",
    "sendmany": "str {address:amount,...} str",
    "sendtoaddress": "str int str str str",
    "setaccount": "str str",
    "signmessage": "str str str? str?",
}


class ParamKind(enum.Enum):
    """Conceptual type of one positional parameter slot."""

    STRING = "str"
    INTEGER = "int"
    BOOLEAN = "bool"
    FLOAT = "float"
    OBJECT = "object"
    VARIANT = "variant"
    LIST = "list"


_SCALAR_KINDS = {
    "str": ParamKind.STRING,
    "int": ParamKind.INTEGER,
    "bool": ParamKind.BOOLEAN,
    "float": ParamKind.FLOAT,
}


@dataclass(frozen=True)
class ParamSlot:
    """One declared positional parameter.

    Attributes:
        kind: Conceptual type of the slot.
        optional: True for "?" slots. The slot still counts toward arity.
        spec: The declaration token as written in CALLSPEC.
    """

    kind: ParamKind
    optional: bool
    spec: str


@dataclass(frozen=True)
class MethodDescriptor:
    """A catalogue entry: method name plus its ordered parameter slots."""

    name: str
    params: tuple[ParamSlot, ...]

    @property
    def arity(self) -> int:
        """Number of positional arguments a call must supply."""
        return len(self.params)

    @property
    def signature(self) -> str:
        """The shape string this descriptor was parsed from."""
        return " ".join(slot.spec for slot in self.params)

    def describe(self) -> str:
        """One-line usage text, e.g. ``getblock(str, bool)``."""
        return f"{self.name}({', '.join(slot.spec for slot in self.params)})"


def parse_slot(token: str) -> ParamSlot:
    """Parse one CALLSPEC token into a ParamSlot.

    Raises:
        CatalogueError: If the token is not a recognised shape.
    """
    if token.startswith("["):
        return ParamSlot(ParamKind.LIST, optional=False, spec=token)
    if token.startswith("{"):
        return ParamSlot(ParamKind.OBJECT, optional=False, spec=token)
    if "|" in token:
        return ParamSlot(ParamKind.VARIANT, optional=False, spec=token)

    optional = token.endswith("?")
    base = token[:-1] if optional else token
    kind = _SCALAR_KINDS.get(base)
    if kind is None:
        raise CatalogueError(f"Unrecognised parameter shape: {token!r}")
    return ParamSlot(kind, optional=optional, spec=token)


def parse_signature(signature: str) -> tuple[ParamSlot, ...]:
    """Parse a whitespace-separated shape string into parameter slots."""
    return tuple(parse_slot(token) for token in signature.split())


def build_catalogue(callspec: Mapping[str, str]) -> Mapping[str, MethodDescriptor]:
    """Parse a callspec table into a read-only name -> descriptor mapping.

    Raises:
        CatalogueError: If any entry has an unrecognised shape or an invalid name.
    """
    descriptors: dict[str, MethodDescriptor] = {}
    for name, signature in callspec.items():
        if not name.isidentifier():
            raise CatalogueError(f"Method name is not a valid identifier: {name!r}")
        try:
            params = parse_signature(signature)
        except CatalogueError as e:
            raise CatalogueError(f"{name}: {e.message}") from e
        descriptors[name] = MethodDescriptor(name=name, params=params)
    return MappingProxyType(descriptors)


CATALOGUE: Mapping[str, MethodDescriptor] = build_catalogue(CALLSPEC)


def get_descriptor(name: str) -> MethodDescriptor:
    """Look up a catalogue entry by method name.

    Raises:
        UnknownMethodError: If the name is not in the catalogue.
    """
    try:
        return CATALOGUE[name]
    except KeyError:
        raise UnknownMethodError(name) from None


T = TypeVar("T", bound=type)


def bind_catalogue(cls: T) -> T:
    """Class decorator: attach one method per catalogue entry.

    The class provides ``_make_call(descriptor)``, a classmethod returning
    the function to install for that descriptor. Each installed function is
    named after its method and closes over its descriptor.

    Raises:
        CatalogueError: If a catalogue name would shadow an attribute the
            class already defines.
    """
    make_call: Callable[[MethodDescriptor], Callable[..., Any]] = cls._make_call  # type: ignore[attr-defined]
    for descriptor in CATALOGUE.values():
        if hasattr(cls, descriptor.name):
            raise CatalogueError(
                f"{cls.__name__}.{descriptor.name} already exists; "
                "catalogue methods may not shadow class attributes"
            )
        method = make_call(descriptor)
        method.__name__ = descriptor.name
        method.__qualname__ = f"{cls.__qualname__}.{descriptor.name}"
        method.__doc__ = f"Call ``{descriptor.describe()}`` on the daemon."
        setattr(cls, descriptor.name, method)
    return cls
