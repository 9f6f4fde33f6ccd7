"""Exception types raised at the I/O boundaries of the toolbox."""


class LwrTlbxError(Exception):
    """Base class for errors that abort an analysis run."""


class DataRetrievalError(LwrTlbxError):
    """The remote spreadsheet could not be downloaded."""


class DataParseError(LwrTlbxError, ValueError):
    """The input file is not a readable table or lacks a required column."""


__all__ = ["DataParseError", "DataRetrievalError", "LwrTlbxError"]
