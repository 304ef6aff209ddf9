"""Archive a directory."""

import os
import subprocess

PARTIAL_SUFFIX = ".partial"

class ArchiveCreationError(RuntimeError):

    def __init__(self, message, returncode=None):
        super().__init__(message)
        self.returncode = returncode

def list_items(type_directory):
    """Return the names of the immediate subdirectories of a directory, sorted."""
    with os.scandir(type_directory) as entries:
        return sorted(entry.name for entry in entries if entry.is_dir())

def tar_command(archive_filename, parent_directory, of_directory, ignore_file=None):
    return (["tar"]
            + (["--exclude-from=%s" % ignore_file] if ignore_file else [])
            + ["--zstd",
               "--create",
               "--file=%s" % archive_filename,
               "-C", parent_directory,
               "--", of_directory])

def make_archive(archive_filename, parent_directory, of_directory, ignore_file=None):
    """Make a zstd-compressed tarball of one directory.

    The tarball is written beside its final name and renamed into place
    only once tar has succeeded, so an interrupted run never leaves a
    truncated file with a proper archive name.
    """
    partial = archive_filename + PARTIAL_SUFFIX
    try:
        result = subprocess.run(tar_command(partial, parent_directory, of_directory,
                                            ignore_file))
    except OSError as e:
        raise ArchiveCreationError("Could not run tar: %s" % e) from e
    if result.returncode != 0:
        if os.path.exists(partial):
            os.remove(partial)
        raise ArchiveCreationError("tar failed with status %d making %s"
                                   % (result.returncode, archive_filename),
                                   result.returncode)
    os.replace(partial, archive_filename)
    return archive_filename
