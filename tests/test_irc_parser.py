from __future__ import annotations

import pytest

from pollirc.irc.models import IRCCommand
from pollirc.irc.parser import parse_irc_message, serialize_irc_message


def test_prefix_command_and_trailing():
    msg = parse_irc_message(":irc.example.net NOTICE AUTH :*** Looking up your hostname")
    assert msg.prefix == "irc.example.net"
    assert msg.command == "NOTICE"
    assert msg.params == ["AUTH", "*** Looking up your hostname"]
    assert msg.trailing == "*** Looking up your hostname"


def test_no_prefix_no_trailing():
    msg = parse_irc_message("JOIN #channel")
    assert msg.prefix is None
    assert msg.command == "JOIN"
    assert msg.params == ["#channel"]
    assert msg.trailing is None


def test_ping_trailing_only():
    msg = parse_irc_message("PING :server123")
    assert msg.command == "PING"
    assert msg.params == ["server123"]
    assert msg.trailing == "server123"


def test_command_only():
    msg = parse_irc_message("QUIT")
    assert msg.command == "QUIT"
    assert msg.params == []
    assert msg.prefix is None


def test_prefix_only_line():
    msg = parse_irc_message(":lonely.prefix")
    assert msg.prefix == "lonely.prefix"
    assert msg.command == ""
    assert msg.params == []


def test_consecutive_spaces_are_dropped():
    msg = parse_irc_message("MODE  #chan   +o    nick")
    assert msg.command == "MODE"
    assert msg.params == ["#chan", "+o", "nick"]


def test_trailing_keeps_spaces_and_colons():
    msg = parse_irc_message(":nick!user@host PRIVMSG #room :hi: there  :) ok")
    assert msg.params == ["#room", "hi: there  :) ok"]
    assert msg.nick == "nick"


def test_colon_inside_middle_param_is_not_trailing():
    msg = parse_irc_message("PRIVMSG a:b :text")
    assert msg.params == ["a:b", "text"]


def test_empty_trailing_is_dropped():
    msg = parse_irc_message("PRIVMSG #room :")
    assert msg.params == ["#room"]
    assert msg.trailing is None


def test_numeric_reply_with_many_middles():
    msg = parse_irc_message(":srv 353 me = #chan :alice bob carol")
    assert msg.command == "353"
    assert msg.params == ["me", "=", "#chan", "alice bob carol"]


def test_raw_and_flat_form_are_kept():
    line = ":a!b@c KICK #x victim :bye"
    msg = parse_irc_message(line)
    assert msg.raw == line
    assert msg.as_list() == ["a!b@c", "KICK", "#x", "victim", "bye"]


def test_empty_line_does_not_raise():
    msg = parse_irc_message("")
    assert msg.command == ""
    assert msg.params == []


@pytest.mark.parametrize(
    "prefix,expected",
    [("nick!user@host", "nick"), ("nick@host", "nick"), ("irc.server.net", "irc.server.net")],
)
def test_nick_from_prefix(prefix, expected):
    assert IRCCommand(command="X", prefix=prefix).nick == expected


def test_serialize_marks_trailing():
    msg = IRCCommand(command="PRIVMSG", params=["#room", "hello world"])
    assert serialize_irc_message(msg) == "PRIVMSG #room :hello world"


def test_serialize_prefix_and_plain_last_param():
    msg = IRCCommand(command="JOIN", params=["#channel"], prefix="me!u@h")
    assert serialize_irc_message(msg) == ":me!u@h JOIN #channel"


def test_serialize_reproduces_parsed_trailing():
    line = "PONG :server123"
    assert serialize_irc_message(parse_irc_message(line)) == line


@pytest.mark.parametrize(
    "line,expected",
    [
        ("PRIVMSG #chan \x1fhello", ["#chan", "\x1fhello"]),
        ("PRIVMSG #chan \x1dslanted\x1d x", ["#chan", "\x1dslanted\x1d", "x"]),
        ("JOIN #caf\xa0e", ["#caf\xa0e"]),
        ("MODE #c\tx +o", ["#c\tx", "+o"]),
    ],
)
def test_only_spaces_separate_middle_params(line, expected):
    assert parse_irc_message(line).params == expected


def test_command_ends_at_first_space_after_prefix():
    msg = parse_irc_message(":p  CMD x")
    assert msg.prefix == "p"
    assert msg.command == ""
    assert msg.params == ["CMD", "x"]
