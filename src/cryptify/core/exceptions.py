"""
Exceptions for cryptify
Every failure raised by the library derives from CryptifyError so the CLI
has a single place to catch, report and map to an exit status
"""


class CryptifyError(Exception):
    # general container for errors
    exit_code = 1


class UsageError(CryptifyError):
    # raised on a wrong argument count, unknown mode or bad config value
    exit_code = 2


class PasswordError(CryptifyError):
    # raised when password collection fails
    pass


class EmptyPasswordError(PasswordError):
    # raised when the prompt returns an empty line (or EOF)
    pass


class PasswordMismatchError(PasswordError):
    # raised when the re-entered password differs from the first entry
    pass


class FileIOError(CryptifyError):
    # raised if reading or writing a file fails
    pass


class FileReadError(FileIOError):
    # raised when the input path is missing or unreadable
    pass


class FileWriteError(FileIOError):
    # raised when the output path cannot be created or written
    pass


class CryptoError(CryptifyError):
    # raised by the cipher layer
    pass


class MalformedContainer(CryptoError):
    # raised when a container is too short or its header is unusable
    pass


class EncryptionFailure(CryptoError):
    # raised when the cipher primitive rejects an encryption
    pass


class DecryptionFailure(CryptoError):
    # raised on bad padding, a failed tag check or a primitive error
    pass
