"""The Command Line Interface for the utility, including the interactive demo loop.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface): any argument missing from the command
line is asked for on-the-fly, unless non-interactive mode is active, in which case defaults are used or the run fails.

Typical usage example:

    textbookrsa
    OR
    python -m textbookrsa demo
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import os
import sys
import typing
import warnings

import colorama

import textbookrsa
from textbookrsa import formatting
from textbookrsa import text
from textbookrsa.errors import RSAError

DEFAULT_MESSAGE = "Hello World!"


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in Textbook RSA.",
            choices=["demo", "keygen", "encrypt", "decrypt"],
            default="demo",
        ),
    "demo":
        HelpData("Interactive generate/encrypt/decrypt walkthrough."),
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "bits":
        HelpData(
            description="Size of each prime (in bits). The modulus is about twice as long.",
            format=int,
            default=textbookrsa.DEFAULT_PRIME_BITS,
        ),
    "rounds":
        HelpData(
            description="Miller-Rabin rounds per prime candidate.",
            format=int,
            advanced=True,
            default=textbookrsa.DEFAULT_ROUNDS,
        ),
    "pub_exponent":
        HelpData(
            description="Preferred exponent for the public key.",
            format=int,
            advanced=True,
            default=textbookrsa.DEFAULT_PUBLIC_EXPONENT,
        ),
    "modulus":
        HelpData(
            description="Key modulus n.",
            format=int,
        ),
    "exponent":
        HelpData(
            description="Key exponent (e to encrypt, d to decrypt).",
            format=int,
        ),
    "message":
        HelpData(
            description="Message to encrypt.",
            format=str,
        ),
    "ciphertext":
        HelpData(
            description="Ciphertext units, space separated, or their base64 armor.",
            format=str,
        ),
    "encoding":
        HelpData(description="Message encoding.", choices=["ascii", "latin-1", "utf-8"], advanced=True, default="ascii"),
}

needs = {
    "demo": ("bits", "rounds", "pub_exponent"),
    "keygen": ("bits", "rounds", "pub_exponent"),
    "encrypt": ("modulus", "exponent", "message", "encoding"),
    "decrypt": ("modulus", "exponent", "ciphertext", "encoding"),
}

generation = argparse.ArgumentParser(add_help=False)
generation.add_argument("--bits", "-b", type=help_dict["bits"].format, help=help_dict["bits"].description)
generation.add_argument("--rounds", "-r", type=help_dict["rounds"].format, help=help_dict["rounds"].description)
generation.add_argument("--pub-exponent",
                        type=help_dict["pub_exponent"].format,
                        help=help_dict["pub_exponent"].description)
keyparts = argparse.ArgumentParser(add_help=False)
keyparts.add_argument("--modulus", "-m", type=help_dict["modulus"].format, help=help_dict["modulus"].description)
keyparts.add_argument("--exponent", "-x", type=help_dict["exponent"].format, help=help_dict["exponent"].description)
encp = argparse.ArgumentParser(add_help=False)
encp.add_argument("--encoding", "-e", choices=help_dict["encoding"].choices, help=help_dict["encoding"].description)
corep = argparse.ArgumentParser(prog="textbookrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {textbookrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Log generation details to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

demo = commands.add_parser("demo", parents=[generation], help=help_dict["demo"].description)
demo.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
keygen = commands.add_parser("keygen", parents=[generation], help=help_dict["keygen"].description)
encrypt = commands.add_parser("encrypt", parents=[keyparts, encp], help=help_dict["encrypt"].description)
encrypt.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
decrypt = commands.add_parser("decrypt", parents=[keyparts, encp], help=help_dict["decrypt"].description)
decrypt.add_argument("--ciphertext", "-c", type=help_dict["ciphertext"].format,
                     help=help_dict["ciphertext"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr(f"Description: {helper_data.description}")
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def parse_ciphertext(payload: str) -> list[int]:
    """Read ciphertext as space separated decimal units, falling back to the base64 armor."""
    parts = payload.split()
    if parts and all(part.isdigit() for part in parts):
        return [int(part) for part in parts]
    return formatting.dearmor_units(payload)


def ask_message(prntr: typing.Callable = print) -> str:
    """Prompt for the demo message, substituting the default on empty input."""
    message = input(f"Type the message (ENTER to use \"{DEFAULT_MESSAGE}\"): ")
    if not message.strip():
        message = DEFAULT_MESSAGE
        prntr(f"Default message used: {message}")
    return message


def should_continue(prntr: typing.Callable = print) -> bool:
    """Ask whether to run another demo round until a valid answer is given."""
    while True:
        ch = input("Continue? Type 0 to continue or 1 to exit: ")
        if ch == "0":
            return True
        if ch == "1":
            return False
        prntr("Invalid option. Try again.")


def wants_color(non_interactive: bool) -> bool:
    """Colour is only used for interactive runs on a terminal, and never when NO_COLOR is set."""
    if non_interactive or os.environ.get("NO_COLOR"):
        return False
    if not sys.stdout.isatty():
        return False
    colorama.just_fix_windows_console()
    return True


def run_demo(message: str, bits: int, rounds: int, pub_exponent: int, color: bool = False) -> str:
    """Run one full generate/encrypt/decrypt round and return its report."""
    units = text.to_units(message)
    pair = textbookrsa.generate_key_pair(bits, rounds, pub_exponent)
    ciphertext = textbookrsa.encrypt(units, pair.public)
    decrypted = textbookrsa.decrypt(ciphertext, pair.private)
    return formatting.render_report(message, units, pair, ciphertext, decrypted, text.from_units(decrypted),
                                    color=color)


def execute(args: argparse.Namespace, pspr: typing.Callable) -> None:
    """Dispatch a fully populated argument set to its subcommand."""
    match args.subcommand:
        case "demo":
            warnings.warn("Textbook RSA is unsecure! Please use with care.", RuntimeWarning)
            color = wants_color(args.non_interactive)
            if args.non_interactive or getattr(args, "message", None) is not None:
                message = args.message if getattr(args, "message", None) is not None else DEFAULT_MESSAGE
                print(run_demo(message, args.bits, args.rounds, args.pub_exponent, color))
                return
            while True:
                print(run_demo(ask_message(), args.bits, args.rounds, args.pub_exponent, color))
                if not should_continue():
                    pspr("Shutting down. See you soon!")
                    return
                print()
        case "keygen":
            pair = textbookrsa.generate_key_pair(args.bits, args.rounds, args.pub_exponent)
            pspr("Public key  (n, e):")
            print(formatting.format_key(pair.public))
            pspr("Private key (n, d):")
            print(formatting.format_key(pair.private))
            pspr("Public key PEM:")
            print(formatting.public_key_pem(pair.public), end="")
            pspr("\nKey pair generated!")
        case "encrypt":
            if args.modulus < 2:
                raise ValueError("Modulus must be >= 2")
            warnings.warn("Textbook RSA is unsecure! Please use with care.", RuntimeWarning)
            key = textbookrsa.Key(args.modulus, args.exponent)
            ciph = textbookrsa.encrypt(text.to_units(args.message, args.encoding), key)
            pspr("Ciphertext:")
            print(formatting.format_values(ciph))
            pspr("Armored:")
            pspr(formatting.armor_units(ciph))
        case "decrypt":
            if args.modulus < 2:
                raise ValueError("Modulus must be >= 2")
            key = textbookrsa.Key(args.modulus, args.exponent)
            clear = textbookrsa.decrypt(parse_ciphertext(args.ciphertext), key)
            pspr("Cleartext:")
            print(text.from_units(clear, args.encoding))


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")

    def pspr(line: str = ""):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(line)

    pspr("Welcome to Textbook RSA!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus, pspr)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus, pspr)
            else:
                res = input_handler(reqs, pstatus, pspr)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    try:
        execute(args, pspr)
    except (RSAError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using Textbook RSA!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
