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

"""Cooperative cancellation.

A L{CancelToken} is polled by long-running code at checkpoints of its own
choosing. Nothing is interrupted preemptively: cancelling a token only
causes the next C{check()} to raise L{numseq.exception.Cancelled}.
"""

import signal
import threading
import time

import numseq.exception
import numseq.util

debug = numseq.util.debug


class CancelToken(object):

    def __init__(self, timeout=None):
        self.event = threading.Event()
        self.deadline = None if timeout is None else time.monotonic() + timeout

    def __repr__(self):
        state = 'cancelled' if self.event.is_set() else 'live'
        return f'CancelToken({state})' if self.deadline is None else f'CancelToken({state}, deadline)'

    # Safe to call from another thread, or from a signal handler.
    def cancel(self):
        self.event.set()

    def is_cancelled(self):
        return self.event.is_set() or self.expired()

    def expired(self):
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self):
        if self.event.is_set():
            raise numseq.exception.Cancelled('cancelled')
        if self.expired():
            raise numseq.exception.Cancelled('timed out')


class SigintCanceller(object):
    """Context manager turning ctrl-C into cancellation of C{token}.

    The previous SIGINT handler is restored on exit. Signal handlers can only be
    installed from the main thread; anywhere else this is a no-op.
    """

    def __init__(self, token):
        self.token = token
        self.previous = None
        self.installed = False

    def __enter__(self):
        if threading.current_thread() is threading.main_thread():
            self.previous = signal.signal(signal.SIGINT, self.ctrl_c_handler)
            self.installed = True
        return self.token

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.installed:
            signal.signal(signal.SIGINT, self.previous)
            self.installed = False

    def ctrl_c_handler(self, signum, frame):
        debug('ctrl c handler')
        assert signum == signal.SIGINT
        self.token.cancel()
