"""Unit tests for divirpc.rpc.catalogue."""

import pytest

from divirpc.core.errors import CatalogueError, UnknownMethodError
from divirpc.rpc.catalogue import (
    CALLSPEC,
    CATALOGUE,
    MethodDescriptor,
    ParamKind,
    bind_catalogue,
    build_catalogue,
    get_descriptor,
    parse_signature,
    parse_slot,
)


class TestParseSlot:
    """Tests for parse_slot token rules."""

    @pytest.mark.parametrize(
        "token,kind",
        [
            ("str", ParamKind.STRING),
            ("int", ParamKind.INTEGER),
            ("bool", ParamKind.BOOLEAN),
            ("float", ParamKind.FLOAT),
        ],
    )
    def test_scalars(self, token, kind):
        """Scalar tokens map to their kind and are not optional."""
        slot = parse_slot(token)
        assert slot.kind is kind
        assert slot.optional is False
        assert slot.spec == token

    def test_optional_marker(self):
        """A trailing '?' marks the slot optional but keeps the base kind."""
        slot = parse_slot("int?")
        assert slot.kind is ParamKind.INTEGER
        assert slot.optional is True

    def test_variant(self):
        """'str|str' is a single variant slot."""
        assert parse_slot("str|str").kind is ParamKind.VARIANT

    def test_object_and_list(self):
        """Braced tokens are objects, bracketed tokens are lists."""
        assert parse_slot("{txid:,index:}").kind is ParamKind.OBJECT
        assert parse_slot("[{txid:id,vout:n},...]").kind is ParamKind.LIST
        assert parse_slot("[str,...]").kind is ParamKind.LIST

    def test_unknown_token_raises(self):
        """Unrecognised tokens are a registration-time error."""
        with pytest.raises(CatalogueError, match="Unrecognised"):
            parse_slot("decimal")


class TestParseSignature:
    """Tests for parse_signature."""

    def test_empty_signature(self):
        """Empty and whitespace-only signatures have no slots."""
        assert parse_signature("") == ()
        assert parse_signature("   ") == ()

    def test_multiple_slots_in_order(self):
        """Slots keep their declaration order."""
        slots = parse_signature("str int bool")
        assert [s.kind for s in slots] == [ParamKind.STRING, ParamKind.INTEGER, ParamKind.BOOLEAN]


class TestCatalogue:
    """Tests for the built-in CATALOGUE."""

    def test_every_callspec_entry_registered(self):
        """Every CALLSPEC name has a descriptor."""
        assert set(CATALOGUE) == set(CALLSPEC)

    def test_catalogue_is_read_only(self):
        """CATALOGUE cannot be mutated."""
        with pytest.raises(TypeError):
            CATALOGUE["newmethod"] = MethodDescriptor("newmethod", ())  # type: ignore[index]

    @pytest.mark.parametrize(
        "name,arity",
        [
            ("getblockcount", 0),
            ("getblock", 2),
            ("getblockhash", 1),
            ("gettxout", 3),
            ("getnewaddress", 1),
            ("signmessage", 4),
            ("createrawtransaction", 2),
            ("signrawtransaction", 4),
            ("listtransactions", 4),
            ("sendfrom", 5),
        ],
    )
    def test_arity(self, name, arity):
        """Arity counts every declared slot, optional ones included."""
        assert CATALOGUE[name].arity == arity

    def test_signature_round_trip(self):
        """descriptor.signature reproduces the declared shape string."""
        assert CATALOGUE["getaddressbalance"].signature == "str|str bool"

    def test_describe(self):
        """describe() renders a usage line."""
        assert CATALOGUE["getblock"].describe() == "getblock(str, bool)"


class TestGetDescriptor:
    """Tests for get_descriptor lookup."""

    def test_known_method(self):
        assert get_descriptor("getinfo").name == "getinfo"

    def test_unknown_method_raises(self):
        with pytest.raises(UnknownMethodError) as exc_info:
            get_descriptor("getfoo")
        assert exc_info.value.method == "getfoo"
        assert "getfoo" in str(exc_info.value)


class TestBuildCatalogue:
    """Tests for build_catalogue validation."""

    def test_bad_shape_names_method(self):
        """Errors identify the offending method."""
        with pytest.raises(CatalogueError, match="brokenmethod"):
            build_catalogue({"brokenmethod": "str nope"})

    def test_bad_name_rejected(self):
        """Method names must be usable as attribute names."""
        with pytest.raises(CatalogueError, match="identifier"):
            build_catalogue({"get-block": "str"})


class TestBindCatalogue:
    """Tests for bind_catalogue class decoration."""

    def test_installs_one_method_per_entry(self):
        """Each entry becomes a named method built by _make_call."""

        @bind_catalogue
        class Recorder:
            @classmethod
            def _make_call(cls, descriptor):
                def call(self, *args):
                    return descriptor.name, args

                return call

        target = Recorder()
        for name in CATALOGUE:
            method = getattr(target, name)
            assert method.__name__ == name
            assert method("x") == (name, ("x",))
        assert "getblock(str, bool)" in Recorder.getblock.__doc__

    def test_refuses_to_shadow_attribute(self):
        """A class attribute with a catalogue name is a registration error."""
        with pytest.raises(CatalogueError, match="getinfo"):

            @bind_catalogue
            class Clash:
                def getinfo(self):
                    return None

                @classmethod
                def _make_call(cls, descriptor):
                    return lambda self: None
