import pytest

from cmdspec.exceptions import CmdspecError, CommandLineError
from cmdspec.help import is_help_request


def noop(values):
    return None


def process_and_help(cl, args):
    error = None
    try:
        cl.process(args)
    except CmdspecError as exc:
        error = exc
    cl.help(error, "unit-test", args)


@pytest.mark.parametrize(
    "args,expected",
    [
        (["help"], True),
        (["--help"], True),
        (["--help", "filter"], True),
        (["test?"], True),
        (["-?"], True),
        (["test"], False),
        (["-"], False),
        ([], False),
    ],
)
def test_is_help_request(args, expected):
    assert is_help_request(args) is expected


def test_usage_on_missing_command(cl, output):
    cl.register_command(noop, "test", "*-t <string-val>")
    process_and_help(cl, [])
    assert output() == (
        "Usage: unit-test <command> <options>\n\nCommand Options:\n\n"
        "  test\n    *-t <val>\n\n"
    )


def test_usage_with_command_help(cl, output):
    cl.register_command(
        noop, "test?This is help for the test option", "*-t <string-val>"
    )
    process_and_help(cl, [])
    assert output() == (
        "Usage: unit-test <command> <options>\n\nCommand Options:\n\n"
        "  test         This is help for the test option\n    *-t <val>\n\n"
    )


def test_usage_search_hint(cl, output):
    options = [f"-t{index} <string-value{index}>" for index in range(1, 14)]
    cl.register_command(noop, "test?This is help", *options)
    process_and_help(cl, [])
    option_lines = "".join(
        f"    -t{index} <value{index}>\n" for index in range(1, 14)
    )
    assert output() == (
        "Usage: unit-test <command> <options>\n\nCommand Options:\n\n"
        "  test              This is help\n"
        f"{option_lines}\n"
        "Search help with unit-test --help <filter text>. "
        "Example: unit-test --help test\n"
        "Or, put a question mark on the end. Example: unit-test test?\n\n"
    )


def test_usage_search_hint_unnamed(cl, output):
    options = [f"-t{index} <string-value{index}>" for index in range(1, 14)]
    cl.register_command(noop, "~", *options)
    process_and_help(cl, ["--bogus"])
    option_lines = "".join(f"  -t{index} <value{index}>\n" for index in range(1, 14))
    assert output() == (
        "Usage: unit-test <options>\n\nCommand Options:\n\n"
        f"{option_lines}\n"
        "Search help with: unit-test --help <filter text>\n\n"
    )


def test_usage_on_unrecognized_command(cl, output):
    cl.register_command(noop, "test")
    process_and_help(cl, ["invalid"])
    assert output() == "Usage: unit-test <command>\n\nCommand Options:\n\n  test\n\n"


def test_other_errors_print_message(cl, output):
    cl.register_command(noop, "test")
    cl.help(RuntimeError("test"), "unit-test", ["invalid"])
    assert output() == "\ntest\n\n"


@pytest.mark.parametrize("args", [["help"], ["--help"]])
def test_help_switch(cl, output, args):
    cl.register_command(noop, "test?Give me help")
    cl.help(None, "unit-test", args)
    assert output() == "Command Options:\n\n  test  Give me help\n\n"


ALL_COMMANDS = "All Commands:\n\n  dog   Fido is his name\n  test  Give me help\n\n"


@pytest.mark.parametrize(
    "args,expected",
    [
        (["help", "dog"], "Matching Commands:\n\n  dog  Fido is his name\n\n"),
        (["--help", "test"], "Matching Commands:\n\n  test  Give me help\n\n"),
        (["test?"], "Matching Commands:\n\n  test  Give me help\n\n"),
        (["invalid"], f"Usage: unit-test <command>\n\n{ALL_COMMANDS}"),
        (["-"], f"Usage: unit-test <command>\n\n{ALL_COMMANDS}"),
        (["--"], f"Usage: unit-test <command>\n\n{ALL_COMMANDS}"),
        (["-?"], ALL_COMMANDS),
        (["--?"], ALL_COMMANDS),
    ],
)
def test_help_switch_two_commands(cl, output, args, expected):
    cl.register_command(noop, "test?Give me help")
    cl.register_command(noop, "dog?Fido is his name")
    cl.help(None, "unit-test", args)
    assert output() == expected


def test_syntax_error_help(cl, output):
    cl.register_command(noop, "test:<bool-flag>?Give me help")
    cl.register_command(noop, "cat:<int-num>?Morris is his name")

    process_and_help(cl, ["test:1"])
    assert output() == (
        "\nSyntax error.\n\nCommand Help:\n\ntest:<flag>  Give me help\n\n"
    )

    process_and_help(cl, ["cat:false"])
    assert output() == "\ninvalid integer value 'false'\n\n"


def test_syntax_error_without_command_help(cl, output):
    cl.register_command(noop, "test", "--flag")
    cl.register_command(noop, "other")
    process_and_help(cl, ["test"])
    assert output() == "\nSyntax error.\n\nCommand Help:\n\ntest\n  --flag\n\n"

    process_and_help(cl, ["other", "x"])
    assert output() == "\nSyntax error.\n\nCommand Help:\n\n"


def test_usage_with_global_options(cl, output):
    cl.register_command(noop, "test:<bool-flag>?Give me help")
    cl.register_global_option(noop, "cat:<int-num>?Morris is his name")

    process_and_help(cl, [""])
    assert output() == (
        "Usage: unit-test <options> <command>\n\n"
        "Global Options:\n\n"
        "  cat:<num>    Morris is his name\n\n"
        "Command Options:\n\n"
        "  test:<flag>  Give me help\n\n"
    )

    cl.register_global_option(noop, "dog?Fido is his name")
    process_and_help(cl, [])
    assert output() == (
        "Usage: unit-test <options> <command>\n\n"
        "Global Options:\n\n"
        "  cat:<num>    Morris is his name\n"
        "  dog          Fido is his name\n\n"
        "Command Options:\n\n"
        "  test:<flag>  Give me help\n\n"
    )


def test_usage_with_global_options_multiple_commands(cl, output):
    cl.register_command(noop, "test:<bool-flag>?Give me help")
    cl.register_command(noop, "run?A second command")
    cl.register_global_option(noop, "cat:<int-num>?Morris is his name")
    cl.register_global_option(noop, "dog?Fido is his name")

    process_and_help(cl, [])
    assert output() == (
        "Usage: unit-test <global options> <command> <options>\n\n"
        "Global Options:\n\n"
        "  cat:<num>    Morris is his name\n"
        "  dog          Fido is his name\n\n"
        "All Commands:\n\n"
        "  run          A second command\n"
        "  test:<flag>  Give me help\n\n"
    )


def test_no_options(cl, output):
    cl.register_command(noop, "~")
    process_and_help(cl, ["arg"])
    assert output() == "Usage: unit-test\n\nThis command has no options.\n\n"

    process_and_help(cl, ["--help"])
    assert output() == "\nThis command has no options.\n\n"


def test_no_options_with_help(cl, output):
    cl.register_command(noop, "~?Help me")
    process_and_help(cl, ["arg"])
    assert output() == "Usage: unit-test\n\nDescription: Help me\n\n"

    process_and_help(cl, ["--help"])
    assert output() == "Description: Help me\n\n"


def test_one_value_with_help(cl, output):
    cl.register_command(noop, "~ <string-flag>?Help me")
    process_and_help(cl, ["arg"])
    assert output() == (
        "Usage: unit-test <options>\n\nCommand Options:\n\n<flag>  Help me\n\n"
    )


def test_default_app_name(cl, output):
    cl.register_command(noop, "~")
    cl.help(CommandLineError("bad"), args=["arg"])
    assert output() == "Usage: unit-test\n\nThis command has no options.\n\n"


def test_run_exit_codes(cl, output):
    seen = []
    cl.register_command(seen.append, "test:<int-count>?Counts")

    assert cl.run(["test:3"]) == 0
    assert seen[-1]["count"] == 3
    assert output() == ""

    assert cl.run(["other"]) == 2
    assert output().startswith("Usage: unit-test <command> <options>")

    assert cl.run(["--help"]) == 0
    assert output() == "Command Options:\n\n  test:<count>  Counts\n\n"

    assert cl.run(["test:three"]) == 1
    assert output() == "\ninvalid integer value 'three'\n\n"
