"""Manage the contents of an archive directory to keep a limited number of each kind of archive."""

import datetime
import os
import shutil
import sys

import prefixed

def human_size(size):
    """Return a byte count as a short string with a binary prefix."""
    return "%sB" % format(prefixed.Float(size), '.1k')

def file_details(filename):
    """Return some details of a file as a dictionary."""
    stat = os.stat(filename)
    return {'filename': filename,
            'size': stat.st_size,
            'size_text': human_size(stat.st_size),
            'created': datetime.datetime.fromtimestamp(stat.st_mtime).isoformat()}

def full_filenames(directory):
    """Return the full names of all the regular files and directories in a directory."""
    return [s for s in (os.path.join(directory, r)
                        for r in os.listdir(directory))
            if os.path.isfile(s) or os.path.isdir(s)]

def matching_entries(directory, pattern):
    """Return the full names of the entries directly in a directory whose
    whole path matches `pattern`, oldest first.

    Archive names carry fixed-width timestamps, so the string order is
    the date order.  Directories are included, in case something has
    made one with an archive's name.
    """
    return sorted(s for s in full_filenames(directory) if pattern.fullmatch(s))

def remove_entry(name):
    if os.path.isdir(name) and not os.path.islink(name):
        shutil.rmtree(name)
    else:
        os.remove(name)

def prune(directory, pattern, keep, verbose=False, dry_run=False):
    """Delete all but the newest `keep` entries matching `pattern`.

    Returns the names of the entries deleted (or, with `dry_run`, the
    names that would have been).  A failure to delete one entry is
    reported and the rest are still tried.
    """
    if keep < 0:
        raise ValueError("Cannot keep a negative number (%d) of archives" % keep)
    matched = matching_entries(directory, pattern)
    if len(matched) <= keep:
        return []
    to_delete = matched[:len(matched) - keep]
    if verbose:
        print("Pruning %d file(s)" % len(to_delete))
    deleted = []
    for name in to_delete:
        if verbose:
            print("Pruning", name)
        if dry_run:
            deleted.append(name)
            continue
        try:
            remove_entry(name)
            deleted.append(name)
        except OSError as e:
            print("Could not delete", name, "while pruning", directory, ":", e,
                  file=sys.stderr)
    return deleted
