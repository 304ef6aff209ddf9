#!/usr/bin/python3

"""Make timestamped archives of dev projects or gists, keeping only the last few of each.

Expects this layout under the development directory ($DEV_HOME, or
~/development):

    project/<project name>/
    gist/<gist name>/
"""

import argparse
import datetime
import os
import sys

import archive
import archive_config
import archive_naming
import managed_directory

EXIT_NO_ITEMS = 1
EXIT_ITEM_FAILED = 3

class MissingItemError(LookupError):
    pass

def keep_count(value):
    try:
        return archive_config.positive_int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))

def make_parser():
    parser = argparse.ArgumentParser(
        prog="dev_archive",
        description="Archive projects or gists")
    parser.add_argument("items", nargs='*',
                        help="""The projects or gists to archive.""")
    parser.add_argument("--all", "-a",
                        action='store_true',
                        help="""Archive every item of the chosen type.""")
    parser.add_argument("--keep", "-k",
                        type=keep_count,
                        help="""The number of archives to keep for each item (default 5).""")
    parser.add_argument("--output", "-o",
                        help="""Directory to put archives in.
                        It is created if it doesn't exist.""")
    parser.add_argument("--period", "-p",
                        choices=list(archive_naming.PERIODS),
                        help="""The period this backup is for.  'week' uses the ISO week number.
                        The default period is 'day'.""")
    parser.add_argument("--type", "-t",
                        choices=archive_naming.ITEM_TYPES,
                        help="""The type of item to archive.
                        The default type is 'project'.""")
    parser.add_argument("--verbose", "-v",
                        action='store_true', default=None)
    parser.add_argument("--config-file", "-c",
                        action='append',
                        help="""Extra YAML config file; may be given more than once.""")
    parser.add_argument("--ignore-file",
                        help="""File listing paths to leave out of archives (default ./ignore).""")
    parser.add_argument("--strict",
                        action='store_true', default=None,
                        help="""Exit with status %d if any item could not be archived.""" % EXIT_ITEM_FAILED)
    parser.add_argument("--dry-run", "-n",
                        action='store_true', default=None,
                        help="""Say what would be archived and pruned, without doing it.""")
    return parser

def type_directory(settings):
    return os.path.join(settings.dev_home, settings.item_type)

def check_item(settings, item):
    """Raise MissingItemError unless `item` names a directory of the chosen type."""
    if item in ("", ".", "..") or os.sep in item or (os.altsep and os.altsep in item):
        raise MissingItemError("'%s' is not a valid %s name." % (item, settings.item_type))
    if not os.path.isdir(os.path.join(type_directory(settings), item)):
        raise MissingItemError("%s '%s' does not exist." % (settings.item_type, item))

def archive_item(settings, item, now):
    """Archive one item, then prune its older archives.
    Returns the names of the archives pruned."""
    archive_file, archive_pattern = archive_naming.describe(settings.item_type, item,
                                                            settings.period, now,
                                                            settings.output)
    if settings.verbose:
        print("Archiving %s %s => %s" % (settings.item_type, item, archive_file))
        if os.path.isfile(archive_file):
            print("Archive %s already exists, overwriting" % archive_file)
    if settings.dry_run:
        if not os.path.isdir(settings.output):
            return []
    else:
        ignore_file = settings.ignore_file
        if ignore_file and not os.path.isfile(ignore_file):
            if settings.verbose:
                print("No ignore file at %s, not excluding anything" % ignore_file)
            ignore_file = None
        archive.make_archive(archive_file, type_directory(settings), item, ignore_file)
        if settings.verbose:
            print("Made %s (%s)" % (archive_file,
                                    managed_directory.file_details(archive_file)['size_text']))
    return managed_directory.prune(settings.output, archive_pattern, settings.keep,
                                   verbose=settings.verbose,
                                   dry_run=settings.dry_run)

def archive_items(settings, items, now=None):
    """Archive each of the named items in turn.
    Returns the number of items that could not be archived."""
    if now is None:
        now = datetime.datetime.now()
    failed = 0
    for item in items:
        try:
            check_item(settings, item)
            archive_item(settings, item, now)
        except MissingItemError as e:
            print("Unable to create archive:", e, file=sys.stderr)
            failed += 1
        except archive.ArchiveCreationError as e:
            print("Unable to create archive of %s '%s': %s" % (settings.item_type, item, e),
                  file=sys.stderr)
            failed += 1
        except OSError as e:
            print("Problem archiving %s '%s': %s" % (settings.item_type, item, e),
                  file=sys.stderr)
            failed += 1
    return failed

def archive_all(settings, now=None):
    """Archive every item of the configured type."""
    print("Archiving all %ss" % settings.item_type)
    try:
        items = archive.list_items(type_directory(settings))
    except OSError as e:
        print("Unable to list %ss:" % settings.item_type, e, file=sys.stderr)
        return 1
    return archive_items(settings, items, now)

def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    parser = make_parser()
    if not argv:
        parser.print_help()
        return EXIT_NO_ITEMS
    args = parser.parse_args(argv)
    if not (args.all or args.items):
        parser.print_help()
        return EXIT_NO_ITEMS

    try:
        settings = archive_config.make_settings(
            archive_config.load_config(args.config_file),
            {'keep': args.keep,
             'output': args.output,
             'period': args.period,
             'type': args.type,
             'ignore-file': args.ignore_file,
             'verbose': args.verbose,
             'strict': args.strict,
             'dry-run': args.dry_run})
    except ValueError as e:
        parser.error(str(e))

    if not settings.dry_run:
        os.makedirs(settings.output, exist_ok=True)

    failed = (archive_all(settings)
              if args.all
              else archive_items(settings, args.items))
    return EXIT_ITEM_FAILED if (failed and settings.strict) else 0

if __name__ == "__main__":
    sys.exit(main())
