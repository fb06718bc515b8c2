#!/usr/bin/env python3
"""
Build a single elimination bracket from a YAML roster and print it.

Usage:
    python src/main.py data/players.yaml
    python src/main.py data/players.yaml --name "Spring Cup" --shuffle --seed 42

The roster is a YAML list of names (seeded in list order) or of
``{name, seed}`` mappings.

Exit codes:
    0: Success
    1: Invalid roster
"""
import argparse
import logging
import random
import sys

import yaml

from bracket import (
    BracketError,
    build_bracket,
    get_bracket_display,
    participants_from_entries,
    shuffle_participants,
)
from settings import load_settings


def load_roster(file_path):
    with open(file_path, mode='r', encoding='utf-8') as file:
        entries = yaml.safe_load(file) or []
    if not isinstance(entries, list):
        raise BracketError(f"{file_path} must contain a list of participants")
    return participants_from_entries(entries)


def format_slot(participant):
    if participant is None:
        return "TBD"
    return f"({participant['seed']}) {participant['name']}"


def print_bracket(display):
    print(f"{display['name']}: {display['total_participants']} players, "
          f"{display['total_rounds']} rounds, {display['byes']} byes")
    for round_data in display['rounds']:
        print()
        print(f"# {round_data['label']}")
        for match in round_data['matches']:
            if match['is_bye']:
                print(f"  Match {match['position'] + 1}: {format_slot(match['winner'])} (bye)")
            else:
                print(f"  Match {match['position'] + 1}: "
                      f"{format_slot(match['first'])} vs {format_slot(match['second'])}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Build a single elimination bracket from a YAML roster'
    )
    parser.add_argument(
        'roster',
        help='YAML file listing participants in seed order'
    )
    parser.add_argument(
        '--name',
        help='Tournament name (default: from settings)'
    )
    parser.add_argument(
        '--shuffle',
        action='store_true',
        help='Randomize seeding before building'
    )
    parser.add_argument(
        '--seed',
        type=int,
        help='Random seed for --shuffle'
    )
    parser.add_argument(
        '--settings',
        help='Settings YAML file (default: $BRACKET_SETTINGS_FILE or data/settings.yaml)'
    )

    args = parser.parse_args(argv)
    settings = load_settings(args.settings)
    logging.basicConfig(level=settings['log_level'])

    try:
        participants = load_roster(args.roster)
        max_participants = settings['max_participants']
        if max_participants and len(participants) > max_participants:
            raise BracketError(f"At most {max_participants} participants are allowed")
        if args.shuffle:
            participants = shuffle_participants(participants, random.Random(args.seed))
        tournament = build_bracket(participants, args.name or settings['default_tournament_name'])
    except (OSError, yaml.YAMLError, BracketError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_bracket(get_bracket_display(tournament))
    return 0


if __name__ == '__main__':
    sys.exit(main())
