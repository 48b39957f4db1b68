class AocdirError(Exception):
    """base exception for this package"""


class FormatError(AocdirError):
    """a directory name does not encode the expected number"""


class DirectoryLayoutError(AocdirError):
    """not running from a day directory or year root"""


class InvalidYearError(DirectoryLayoutError):
    """neither the current nor the parent directory names a year"""


class InvalidDayError(DirectoryLayoutError):
    """the current directory does not name a day"""


class PuzzleLockedError(AocdirError):
    """trying to access input before the unlock"""


class ClassificationError(AocdirError):
    """the server's answer to a submission was not recognised"""

    def __init__(self, message):
        super().__init__(f"unrecognised response: {message!r}")
        self.message = message


class MissingSessionError(AocdirError):
    """no session token could be found"""


class ScaffoldError(AocdirError):
    """creating a day or part would clobber something, or there's nothing to do"""


class SolverError(AocdirError):
    """the local solve for a part crashed, timed out, or returned nothing"""
