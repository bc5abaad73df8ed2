"""
Bundled binary archives.

Release builds place the prebuilt ``php-cli-8.4-<os>-<arch>.zip`` and
``php-parser-4.19.4.zip`` archives in this package. Source checkouts ship
without them, in which case the interpreter is looked up on PATH and the
parser must be supplied explicitly or through a configured resource directory.
"""
