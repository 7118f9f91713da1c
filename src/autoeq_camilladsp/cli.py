#!/usr/bin/env python3
"""
autoeq-camilladsp command line

Usage:
    autoeq-camilladsp                           # interactive mode
    autoeq-camilladsp init -o headphones.json   # dump the AutoEq headphone list
    autoeq-camilladsp generate "Sennheiser HD 650" --crossfeed mpm --devices my_devices.yml -o configs
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

from . import __version__
from .builder import ConfigurationBuilder
from .directory import DirectoryResolver, Exact, NotFound, Suggestions
from .emitter import DevicesFile, write_config_file
from .errors import AutoEqCamillaError
from .presets import Crossfeed
from .scraper import LinkScraper
from .settings import Settings

BANNER = f"""
---------------------------------------------
 autoeq-camilladsp {__version__}

 Make your Headphones or IEMs more enjoyable
 with AutoEq and Crossfeed
---------------------------------------------
"""

MAX_SUGGESTIONS_SHOWN = 25

Prompt = Callable[[str], str]


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


def print_suggestions(names) -> None:
    print(f"\nDid you mean one of these? ({len(names)} matches)")
    for i, name in enumerate(names[:MAX_SUGGESTIONS_SHOWN], 1):
        print(f"  {i}: {name}")
    if len(names) > MAX_SUGGESTIONS_SHOWN:
        print(f"  ... and {len(names) - MAX_SUGGESTIONS_SHOWN} more, try a longer name")


def create_config(scraper: LinkScraper, headphone: Exact, devices: DevicesFile,
                  crossfeed: Crossfeed, output_dir: Path) -> Path:
    """Fetch corrections for one headphone and write its config file"""
    print(f"Loading EQ settings for {headphone.name}...")
    correction = scraper.fetch_correction(headphone.link)
    print(f"  Preamp {correction.gain} dB, {len(correction.eq_bands)} bands")

    configuration = ConfigurationBuilder.build(correction, crossfeed)
    return write_config_file(configuration, headphone.name, devices=devices,
                             crossfeed=crossfeed, output_dir=output_dir)


# --- Interactive mode -------------------------------------------------------

def prompt_headphone(catalog: Dict[str, str], prompt: Prompt = input) -> Optional[Exact]:
    """Ask until the query resolves to one headphone; None if the user quits"""
    suggestions = ()
    while True:
        answer = prompt("\nPick your device (type a name, a number from the list, or 'q' to quit): ").strip()
        if answer.lower() == 'q':
            return None
        if answer.isdigit() and suggestions:
            index = int(answer) - 1
            if 0 <= index < min(len(suggestions), MAX_SUGGESTIONS_SHOWN):
                answer = suggestions[index]

        result = DirectoryResolver.resolve(catalog, answer)
        if isinstance(result, Exact):
            print(f"Great! {result.name} could be found in AutoEq.")
            return result
        if isinstance(result, Suggestions):
            suggestions = result.names
            print_suggestions(suggestions)
        else:
            suggestions = ()
            print(f"Sorry, nothing like {answer!r} is in the AutoEq database.")


def prompt_devices(prompt: Prompt = input) -> Optional[DevicesFile]:
    """Ask for an optional custom devices file; None if the user quits"""
    print("\nYou can include a custom 'devices' section from a .yml file.")
    print("Otherwise the configuration is created with a default 'devices' section.")
    answer = prompt("Include a custom 'devices' section? [y/N]: ").strip().lower()
    if answer not in ('y', 'yes'):
        return DevicesFile.default()

    path = prompt("Relative path to your custom 'devices' file: ").strip()
    while not Path(path).is_file():
        path = prompt("Sorry, this file does not seem to exist. Try again or enter 'q' to quit: ").strip()
        if path.lower() == 'q':
            return None
    return DevicesFile.custom(path)


def prompt_crossfeed(prompt: Prompt = input) -> Crossfeed:
    choices = list(Crossfeed)
    print("\nCrossfeed to include in your configuration:")
    for i, choice in enumerate(choices):
        print(f"  {i}: {choice.label}")
    answer = prompt("Select [0]: ").strip()
    if answer.isdigit() and int(answer) < len(choices):
        return choices[int(answer)]
    return Crossfeed.NONE


def interactive_mode(scraper: LinkScraper, output_dir: Path, prompt: Prompt = input) -> int:
    print(BANNER)
    print("Loading Database...")
    catalog = scraper.fetch_catalog()
    print(f"...Database loaded ({len(catalog)} entries).")

    headphone = prompt_headphone(catalog, prompt)
    if headphone is None:
        return 0
    devices = prompt_devices(prompt)
    if devices is None:
        return 0
    crossfeed = prompt_crossfeed(prompt)

    path = create_config(scraper, headphone, devices, crossfeed, output_dir)
    print(f"\nYour config for CamillaDSP was created: {path}")
    print("Happy listening! :)")
    return 0


# --- Non-interactive commands -----------------------------------------------

def init_mode(scraper: LinkScraper, output: Optional[str]) -> int:
    catalog = scraper.fetch_catalog()
    data = json.dumps(catalog, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(data + '\n', encoding='utf-8')
        print(f"Wrote {len(catalog)} headphones to {output}")
    else:
        print(data)
    return 0


def generate_mode(scraper: LinkScraper, query: str, crossfeed: Crossfeed,
                  devices: DevicesFile, output_dir: Path) -> int:
    catalog = scraper.fetch_catalog()
    result = DirectoryResolver.resolve(catalog, query)
    if isinstance(result, Suggestions):
        print_suggestions(result.names)
        return 2
    if isinstance(result, NotFound):
        print(f"No headphone matching {query!r} found in AutoEq.")
        return 1

    path = create_config(scraper, result, devices, crossfeed, output_dir)
    print(f"Created {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='autoeq-camilladsp',
        description='Create a CamillaDSP config from AutoEq headphone corrections, with optional crossfeed'
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug logging')
    parser.add_argument(
        '-o', '--output-dir',
        default='.',
        help='Directory for the generated config (default: current directory)'
    )

    subparsers = parser.add_subparsers(dest='command')

    init_parser = subparsers.add_parser('init', help='Write the AutoEq headphone list as JSON')
    init_parser.add_argument('-o', '--output', help='JSON file to write (default: stdout)')

    gen_parser = subparsers.add_parser('generate', help='Create a config without prompts')
    gen_parser.add_argument('headphone', help="Headphone name, e.g. 'Sennheiser HD 650'")
    gen_parser.add_argument(
        '--crossfeed',
        choices=[c.slug for c in Crossfeed],
        default=Crossfeed.NONE.slug,
        help='Crossfeed preset to include (default: none)'
    )
    gen_parser.add_argument('--devices', help="File with a custom 'devices' section")
    # SUPPRESS keeps a top-level -o from being reset to the default here
    gen_parser.add_argument(
        '-o', '--output-dir',
        default=argparse.SUPPRESS,
        help='Directory for the generated config (default: current directory)'
    )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    output_dir = Path(args.output_dir)

    try:
        scraper = LinkScraper(Settings.from_env())
        if args.command == 'init':
            return init_mode(scraper, args.output)
        if args.command == 'generate':
            devices = DevicesFile.custom(args.devices) if args.devices else DevicesFile.default()
            if devices.path is not None and not devices.path.is_file():
                print(f"Error: Devices file not found: {devices.path}")
                return 1
            return generate_mode(scraper, args.headphone, Crossfeed.from_slug(args.crossfeed),
                                 devices, output_dir)
        return interactive_mode(scraper, output_dir)
    except AutoEqCamillaError as e:
        print(f"Error: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nCancelled.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
