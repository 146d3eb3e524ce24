# This file is part of numseq.
# 
# numseq is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the
# Free Software Foundation, either version 3 of the License, or at your
# option) any later version.
# 
# numseq is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# for more details.
# 
# You should have received a copy of the GNU General Public License
# along with numseq.  If not, see <https://www.gnu.org/licenses/>.

"""Exceptions terminating a numseq command.

Every exception here extends L{KillCommandException}, which extends
C{BaseException}, so none of them can be caught by C{except Exception}.
A command raising one of these is over: nothing is retried and no partial
result is reported as success.
"""


# Exception for terminating command. By extending BaseException, this exception
# cannot be caught by "except Exception".
class KillCommandException(BaseException):

    def __init__(self, cause):
        super().__init__(cause)
        self.cause = cause

    def __str__(self):
        return str(self.cause)


# Zero positional args, or more than three.
class InvalidArgumentCount(KillCommandException):

    def __init__(self, message):
        super().__init__(message)


class InvalidNumber(KillCommandException):

    def __init__(self, value, reason=None):
        super().__init__(f'invalid number: {value!r}'
                         if reason is None else
                         f'invalid number: {value!r} ({reason})')
        self.value = value


class ZeroIncrement(KillCommandException):

    def __init__(self):
        super().__init__('increment cannot be zero')


class InvalidFormat(KillCommandException):

    def __init__(self, format, error):
        super().__init__(f'invalid format {format!r}: {error}')
        self.format = format


class WriteFailure(KillCommandException):

    def __init__(self, error):
        super().__init__(f'write error: {error}')
        self.error = error


class Cancelled(KillCommandException):

    def __init__(self, reason='cancelled'):
        super().__init__(reason)
        self.reason = reason
