"""Masked password entry for the command line."""

from __future__ import annotations

import getpass
import hmac
from typing import Callable

from cryptify.core.exceptions import EmptyPasswordError, PasswordMismatchError
from cryptify.security.memory import wipe

PasswordReader = Callable[[str], bytearray]


def read_password(prompt: str) -> bytearray:
    """Read a password without echoing it.

    getpass turns terminal echo off for the read and restores it on every
    exit path, including Ctrl-C. The result is a bytearray so the caller
    can wipe it.
    """
    try:
        entered = getpass.getpass(prompt)
    except EOFError:
        entered = ""
    if not entered:
        raise EmptyPasswordError("Empty passwords are not allowed.")
    return bytearray(entered.encode("utf-8"))


def collect_password(mode: str, reader: PasswordReader = read_password) -> bytearray:
    """Prompt for the password, twice when encrypting.

    The confirmation copy is always wiped; on a mismatch the first copy is
    wiped as well before PasswordMismatchError is raised.
    """
    password = reader("Enter password: ")
    if mode != "e":
        return password

    try:
        confirm = reader("Re-enter password: ")
    except BaseException:
        wipe(password)
        raise
    try:
        matches = hmac.compare_digest(password, confirm)
    finally:
        wipe(confirm)
    if not matches:
        wipe(password)
        raise PasswordMismatchError("Passwords do not match.")
    return password
