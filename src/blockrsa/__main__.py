"""The Command Line Interface for the engine, including Interactive elements.

A hybrid CLI/ICLI: every argument missing from the command line is asked for interactively, unless
`--non-interactive` is given, in which case defaults are used where they exist and a missing argument is an error.

Typical usage example:

    blockrsa keygen --keysize 512 -p key.pub -P key.priv
    blockrsa -n encrypt -p key.pub --message "HELLO"
    python -m blockrsa decrypt-file -P key.priv --input notes.rsa --output notes.txt
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import pathlib
import sys
import typing

import blockrsa
from blockrsa import engine
from blockrsa import files


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands.",
            choices=["keygen", "encrypt", "decrypt", "encrypt-file", "decrypt-file"],
        ),
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("Text encryption utility."),
    "decrypt":
        HelpData("Text decryption utility."),
    "encrypt-file":
        HelpData("File encryption utility."),
    "decrypt-file":
        HelpData("File decryption utility."),
    "public_key":
        HelpData(description="Location of the public key file.", format=pathlib.Path),
    "private_key":
        HelpData(description="Location of the private key file.", format=pathlib.Path),
    "message":
        HelpData(description="Message (ciphertext as hex lines when decrypting). If a path, start with `P:`"),
    "input":
        HelpData(description="File to read.", format=pathlib.Path),
    "output":
        HelpData(description="File to write.", format=pathlib.Path),
    "encoding":
        HelpData(description="Payload encoding.", choices=["utf-8", "utf-16", "ascii"], default="utf-8"),
    "keysize":
        HelpData(description="Key size (in bits).", choices=["256", "512", "1024", "2048"], default="512"),
    "overwrite":
        HelpData(description="Overwrite specified destination files if they exist?", choices=["Y", "N"], default="N"),
}

needs = {
    "keygen": ("public_key", "private_key", "keysize"),
    "encrypt": ("public_key", "message", "encoding"),
    "decrypt": ("private_key", "message", "encoding"),
    "encrypt-file": ("public_key", "input", "output"),
    "decrypt-file": ("private_key", "input", "output"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
payloads.add_argument("--encoding", "-e", choices=help_dict["encoding"].choices, help=help_dict["encoding"].description)
paths = argparse.ArgumentParser(add_help=False)
paths.add_argument("--input", "-i", type=help_dict["input"].format, help=help_dict["input"].description)
paths.add_argument("--output", "-o", type=help_dict["output"].format, help=help_dict["output"].description)
corep = argparse.ArgumentParser(prog="blockrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {blockrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--keysize", choices=help_dict["keysize"].choices, help=help_dict["keysize"].description)
keygen.add_argument("--overwrite", action="store_const", const="Y", help=help_dict["overwrite"].description)
commands.add_parser("encrypt", parents=[pubkey, payloads], help=help_dict["encrypt"].description)
commands.add_parser("decrypt", parents=[privkey, payloads], help=help_dict["decrypt"].description)
commands.add_parser("encrypt-file", parents=[pubkey, paths], help=help_dict["encrypt-file"].description)
commands.add_parser("decrypt-file", parents=[privkey, paths], help=help_dict["decrypt-file"].description)


def checkmodes(arg: str, non_interactive: bool):
    helper_data = help_dict[arg]
    if non_interactive:
        if helper_data.default is None:
            raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
        return helper_data.default
    return helper_data


def prompt_handler(arg: str, non_interactive: bool, prntr: typing.Callable = print):
    """Ask for a missing argument, offering its choices if it has any."""
    helper_data = checkmodes(arg, non_interactive)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    for choice in helper_data.choices or ():
        defstring = " (Default)" if choice == helper_data.default else ""
        details = f" - {help_dict[choice].description}" if choice in help_dict else ""
        prntr(f"{choice}{details}{defstring}")
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if helper_data.choices is not None:
            if ch in helper_data.choices:
                return ch
            prntr("Please select an option from the list.")
            continue
        if not ch:
            prntr("Please provide a value.")
            continue
        try:
            return helper_data.format(ch)
        except ValueError:
            prntr(f"We could not convert your value to {helper_data.format.__name__}.")


def check_message(mess: str, enc: str) -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        try:
            with open(mess[2:], "r", encoding=enc) as f:
                mess = f.read()
        except UnicodeDecodeError as err:
            raise blockrsa.InvalidParameter(f"{mess[2:]} is not valid {enc}.") from err
        except OSError as err:
            raise blockrsa.FileAccessError(f"Could not read message file: {err}") from err
    return mess


def parse_ciphertext(mess: str) -> list[int]:
    """Read encrypted blocks from hex lines. Unlike file decryption, any malformed line is an error."""
    blocks = []
    for line in mess.splitlines():
        block = files.parse_line(line)
        if block is not None:
            blocks.append(block)
    return blocks


def report(res: engine.Result) -> None:
    """Print diagnostics to stderr and leave with status 1 on failure."""
    for diag in res.diagnostics:
        print(f"Warning: {diag}", file=sys.stderr)
    if not res.ok:
        print(f"{res.kind.value}: {res.error}", file=sys.stderr)
        sys.exit(1)


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    quiet = args.non_interactive

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not quiet:
            print(text)

    pspr("Welcome to Block RSA!\n")
    if not args.subcommand:
        args.subcommand = prompt_handler("subcommand", quiet)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            setattr(args, reqs, prompt_handler(reqs, quiet))
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    try:
        execute(args, pspr)
    except blockrsa.RSAError as err:
        print(f"{err.kind.value}: {err}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using Block RSA!")
    pspr("Goodbye!")


def execute(args: argparse.Namespace, pspr: typing.Callable) -> None:
    """Run the chosen subcommand once all arguments are known."""
    match args.subcommand:
        case "keygen":
            if args.private_key.exists() or args.public_key.exists():
                rs = getattr(args, "overwrite", None)
                if rs is None:
                    rs = prompt_handler("overwrite", args.non_interactive, pspr)
                if rs == "N":
                    print("Destination private or public key already exists!")
                    return
            res = engine.generate_keys(int(args.keysize))
            report(res)
            res.value.private.export(args.private_key)
            res.value.public.export(args.public_key)
            n_hex, e_hex = res.value.public.to_hex()
            pspr(f"\nKey pair generated!\nn: {n_hex}\ne: {e_hex}")
        case "encrypt":
            message = check_message(args.message, args.encoding)
            res = engine.encrypt_text(message.encode(args.encoding), blockrsa.PublicKey.import_key(args.public_key))
            report(res)
            pspr("Ciphertext:")
            print("\n".join(f"{c:x}" for c in res.value))
        case "decrypt":
            try:
                blocks = parse_ciphertext(check_message(args.message, "ascii"))
            except ValueError as err:
                raise blockrsa.InvalidParameter(str(err)) from err
            res = engine.decrypt_text(blocks, blockrsa.PrivateKey.import_key(args.private_key))
            report(res)
            pspr("Cleartext:")
            print(res.value.decode(args.encoding, errors="replace"))
        case "encrypt-file":
            report(engine.encrypt_file(args.input, args.output, blockrsa.PublicKey.import_key(args.public_key)))
            pspr(f"Encrypted {args.input} into {args.output}.")
        case "decrypt-file":
            report(engine.decrypt_file(args.input, args.output, blockrsa.PrivateKey.import_key(args.private_key)))
            pspr(f"Decrypted {args.input} into {args.output}.")


if __name__ == "__main__":
    main()
