"""Work out what an archive is called, and what its older siblings are called."""

import os
import re

ARCHIVE_SUFFIX = ".tar.zst"

ITEM_TYPES = ('project', 'gist')

# Each timestamp is fixed width and zero-padded, biggest unit first, so
# sorting the filenames as strings puts them in date order.
PERIODS = {
    'day': ("%Y-%m-%d", "[0-9]{4}-[0-9]{2}-[0-9]{2}"),
    'week': ("%G-wk%V", "[0-9]{4}-wk[0-9]{2}"),
    'month': ("%Y-%m", "[0-9]{4}-[0-9]{2}"),
}

class InvalidPeriod(ValueError):
    pass

def _period_entry(period):
    try:
        return PERIODS[period]
    except (KeyError, TypeError):
        raise InvalidPeriod("Unknown period %r. It must be one of %s"
                            % (period, ", ".join(repr(p) for p in PERIODS)))

def timestamp_for(period, now):
    """Return the timestamp string for the period containing `now`."""
    return now.strftime(_period_entry(period)[0])

def period_regex(period):
    """Return the regex matching any timestamp of the given period."""
    return _period_entry(period)[1]

def archive_basename(item_type, item, timestamp, suffix=ARCHIVE_SUFFIX):
    return "%s-%s-%s%s" % (item_type, item, timestamp, suffix)

def describe(item_type, item, period, now, output_directory, suffix=ARCHIVE_SUFFIX):
    """Return the path to write this run's archive to, and a compiled
    pattern matching the full path of every archive of the same item,
    type and period, whichever date it is for.

    The item name is matched literally.  Item names may contain "-"
    themselves, so an archive filename can't be split back into type,
    item and date; nothing tries to, and the pattern has to match the
    whole path.
    """
    path = os.path.join(output_directory,
                        archive_basename(item_type, item,
                                         timestamp_for(period, now),
                                         suffix))
    pattern = re.compile(re.escape(os.path.join(output_directory,
                                                "%s-%s-" % (item_type, item)))
                         + period_regex(period)
                         + re.escape(suffix))
    return path, pattern
