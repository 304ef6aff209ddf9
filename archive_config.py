#!/usr/bin/python3

"""Configuration for dev_archive: built-in defaults, overlaid by YAML files."""

import argparse
import collections
import copy
import os
import yaml

import archive_naming

DEFAULT_CONFIG_FILES = ["~/.config/dev-archive.yaml"]

HARDCODED_DEFAULT_CONFIG = {
    'archive': {
        'dev-home': "~/development",
        'output': None,
        'keep': 5,
        'period': "day",
        'type': "project",
        'ignore-file': "./ignore",
        'strict': False}}

ArchiveSettings = collections.namedtuple(
    'ArchiveSettings',
    ['dev_home', 'output', 'keep', 'period', 'item_type',
     'ignore_file', 'verbose', 'strict', 'dry_run'])

# based on https://stackoverflow.com/questions/3232943/update-value-of-a-nested-dictionary-of-varying-depth
def rec_update(basedict, u):
    """Update a dictionary recursively."""
    for k, v in u.items():
        if isinstance(v, dict):
            basedict[k] = rec_update(basedict.get(k, {}), v)
        else:
            basedict[k] = v
    return basedict

def load_multiple_yaml(target_dict, yaml_files):
    """Load several YAML files, merging the data from them."""
    if yaml_files:
        for yaml_file in yaml_files:
            if yaml_file is None:
                continue
            yaml_file = os.path.expanduser(yaml_file)
            if os.path.exists(yaml_file):
                with open(yaml_file) as yaml_handle:
                    rec_update(target_dict, yaml.safe_load(yaml_handle) or {})

def recursive_expand(value):
    return (os.path.expanduser(os.path.expandvars(value))
            if isinstance(value, str)
            else ({k: recursive_expand(v) for k, v in value.items()}
                  if isinstance(value, dict)
                  else ([recursive_expand(v) for v in value]
                        if isinstance(value, list)
                        else value)))

def load_config(config_files=None, no_default_files=False):
    config = copy.deepcopy(HARDCODED_DEFAULT_CONFIG)
    if 'DEV_HOME' in os.environ:
        config['archive']['dev-home'] = os.environ['DEV_HOME']

    load_multiple_yaml(config, ([] if no_default_files else DEFAULT_CONFIG_FILES)
                       + (config_files or []))

    return recursive_expand(config)

def lookup(config, *keys):
    for key in keys:
        config = config[key]
    return config

def positive_int(value):
    """Convert a keep count, rejecting anything that isn't a positive integer."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError("%r is not a whole number" % (value,))
    if isinstance(value, bool) or isinstance(value, float) or number < 1:
        raise ValueError("keep must be a positive integer, not %r" % (value,))
    return number

def make_settings(config, overrides=None):
    """Freeze a loaded config, with command-line overrides, into ArchiveSettings.
    Overrides that are None leave the config value in place."""
    section = lookup(config, 'archive')
    if not isinstance(section, dict):
        raise ValueError("The 'archive' config section must be a mapping, not %r" % (section,))
    section = dict(section)
    for key, value in (overrides or {}).items():
        if value is not None:
            section[key] = value
    if section['type'] not in archive_naming.ITEM_TYPES:
        raise ValueError("Unknown item type %r. It must be one of %s"
                         % (section['type'], ", ".join(repr(t) for t in archive_naming.ITEM_TYPES)))
    if section['period'] not in archive_naming.PERIODS:
        raise ValueError("Unknown period %r. It must be one of %s"
                         % (section['period'], ", ".join(repr(p) for p in archive_naming.PERIODS)))
    dev_home = section['dev-home']
    return ArchiveSettings(
        dev_home=dev_home,
        output=section['output'] or os.path.join(dev_home, "archive"),
        keep=positive_int(section['keep']),
        period=section['period'],
        item_type=section['type'],
        ignore_file=section['ignore-file'],
        verbose=bool(section.get('verbose', False)),
        strict=bool(section['strict']),
        dry_run=bool(section.get('dry-run', False)))

def main():
    """Show the settings that dev_archive would run with."""
    parser = argparse.ArgumentParser()
    parser.add_argument("--no-default-files", action='store_true')
    parser.add_argument("--config-file", "-c",
                        action='append')
    parser.add_argument("keys", nargs='*')
    args = parser.parse_args()

    config = load_config(args.config_file, args.no_default_files)

    if args.keys:
        print(lookup(config, *args.keys))
    else:
        print(make_settings(config))

if __name__ == '__main__':
    main()
