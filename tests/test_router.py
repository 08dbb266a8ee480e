"""Tests for the command router."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from apirouter import route
from apirouter.models import ChatMessage, MessageType
from apirouter.router import (
    CommandRouter,
    execute,
    is_command,
    parse_command,
    parse_input,
)

PREFIX = "!alal-"


def _msg(content, type="api"):
    return {"type": type, "content": content}


class TestIsCommand:

    def test_api_message_with_prefix_matches(self):
        assert is_command(PREFIX, _msg("!alal-gather"))

    @pytest.mark.parametrize("msg_type", ["general", "emote", "whisper", "rollresult", None])
    def test_non_api_type_never_matches(self, msg_type):
        assert not is_command(PREFIX, _msg("!alal-gather", type=msg_type))

    def test_prefix_must_be_at_start(self):
        assert not is_command(PREFIX, _msg("say !alal-gather"))

    def test_prefix_is_case_sensitive(self):
        assert not is_command(PREFIX, _msg("!ALAL-gather"))

    def test_missing_or_non_string_content(self):
        assert not is_command(PREFIX, {"type": "api"})
        assert not is_command(PREFIX, {"type": "api", "content": None})
        assert not is_command(PREFIX, SimpleNamespace(type="api"))

    def test_non_string_prefix_never_matches(self):
        assert not is_command(None, _msg("!alal-gather"))

    def test_attribute_style_and_model_messages(self):
        assert is_command(PREFIX, SimpleNamespace(type="api", content="!alal-gather"))
        assert is_command(PREFIX, ChatMessage(type=MessageType.API, content="!alal-gather"))
        assert not is_command(
            PREFIX, ChatMessage(type=MessageType.GENERAL, content="!alal-gather")
        )


class TestParseCommand:

    def test_strips_prefix(self):
        assert parse_command(PREFIX, _msg("!alal-gather")) == "gather"

    def test_ignores_arguments(self):
        assert parse_command(PREFIX, _msg("!alal-harvest herb1 herb2")) == "harvest"

    def test_lowercases_command(self):
        assert parse_command(PREFIX, _msg("!alal-GaThEr x")) == "gather"

    def test_only_leading_prefix_is_removed(self):
        assert parse_command(PREFIX, _msg("!alal-x!alal-y")) == "x!alal-y"

    def test_splits_on_space_only(self):
        # Tabs are not a command-word separator
        assert parse_command(PREFIX, _msg("!alal-gather\tx")) == "gather\tx"

    def test_bare_prefix_gives_empty_command(self):
        assert parse_command(PREFIX, _msg("!alal-")) == ""


class TestParseInput:

    def test_no_arguments(self):
        assert parse_input(_msg("!alal-gather")) == []

    def test_arguments_in_order(self):
        assert parse_input(_msg("!alal-harvest herb1 herb2")) == ["herb1", "herb2"]

    def test_any_whitespace_run_separates(self):
        content = "!alal-harvest  herb1\therb2\n\nherb3 "
        assert parse_input(_msg(content)) == ["herb1", "herb2", "herb3"]

    def test_no_quote_handling(self):
        assert parse_input(_msg('!alal-say "hello world"')) == ['"hello', 'world"']


class TestExecute:

    def test_calls_handler_with_args(self):
        fn = MagicMock()
        execute({"harvest": fn}, "harvest", ["a", "b"])
        fn.assert_called_once_with("a", "b")

    def test_unknown_command_is_noop(self):
        fn = MagicMock()
        execute({"harvest": fn}, "gather", [])
        fn.assert_not_called()

    def test_non_callable_route_is_noop(self):
        execute({"harvest": "not a function"}, "harvest", ["a"])

    def test_non_mapping_routes_is_noop(self):
        execute(None, "harvest", ["a"])
        execute(["harvest"], "harvest", ["a"])

    def test_return_value_is_discarded(self):
        assert execute({"x": lambda: 42}, "x", []) is None


class TestCommandRouter:

    def test_route_returns_router(self):
        handler = route(PREFIX, {})
        assert isinstance(handler, CommandRouter)
        assert handler.prefix == PREFIX

    def test_gather_without_arguments(self):
        fn = MagicMock()
        route(PREFIX, {"gather": fn})(_msg("!alal-gather"))
        fn.assert_called_once_with()

    def test_harvest_with_arguments(self):
        fn = MagicMock()
        route(PREFIX, {"harvest": fn})(_msg("!alal-harvest herb1 herb2"))
        fn.assert_called_once_with("herb1", "herb2")

    def test_general_message_is_ignored(self):
        fn = MagicMock()
        route(PREFIX, {"gather": fn})(_msg("!alal-gather", type="general"))
        fn.assert_not_called()

    def test_unknown_command_with_empty_table(self):
        assert route(PREFIX, {})(_msg("!alal-unknown")) is None

    def test_mixed_case_command_is_normalized(self):
        fn = MagicMock()
        route(PREFIX, {"gather": fn})(_msg("!alal-Gather x"))
        fn.assert_called_once_with("x")

    def test_mixed_case_prefix_does_not_match(self):
        fn = MagicMock()
        route(PREFIX, {"gather": fn})(_msg("!ALAL-Gather x"))
        fn.assert_not_called()

    def test_text_without_prefix_is_ignored(self):
        fn = MagicMock()
        route(PREFIX, {"gather": fn})(_msg("gather"))
        fn.assert_not_called()

    def test_handler_exception_propagates(self):
        fn = MagicMock(side_effect=RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            route(PREFIX, {"gather": fn})(_msg("!alal-gather"))

    def test_table_is_not_mutated_or_copied(self):
        fn = MagicMock()
        routes = {}
        handler = route(PREFIX, routes)
        handler(_msg("!alal-gather"))
        routes["gather"] = fn
        handler(_msg("!alal-gather now"))
        fn.assert_called_once_with("now")
        assert routes == {"gather": fn}

    def test_message_is_not_mutated(self):
        message = _msg("!alal-harvest herb1")
        route(PREFIX, {"harvest": MagicMock()})(message)
        assert message == {"type": "api", "content": "!alal-harvest herb1"}

    def test_identically_configured_routers_agree(self):
        fn = MagicMock()
        routes = {"harvest": fn}
        first, second = route(PREFIX, routes), route(PREFIX, routes)
        first(_msg("!alal-harvest a b"))
        second(_msg("!alal-harvest a b"))
        assert fn.call_args_list[0] == fn.call_args_list[1]

    def test_routers_are_independent(self):
        alal, other = MagicMock(), MagicMock()
        first = route(PREFIX, {"gather": alal})
        second = route("!oth-", {"gather": other})
        first(_msg("!alal-gather"))
        second(_msg("!oth-gather"))
        alal.assert_called_once_with()
        other.assert_called_once_with()
