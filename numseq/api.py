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

import atexit as _atexit
import io as _io

import numseq.cancel as _cancel
import numseq.env as _env
import numseq.opmodule as _opmodule

# Created on first use, from the process environment.
_ENV = None


def seq(*args, **kwargs): return _opmodule.create_op(_api_env(), 'seq', *args, **kwargs)


def run(x, stdout=None, cancel=None, timeout=None):
    """Run the op C{x}, writing its output to C{stdout} (default: C{sys.stdout}).

    Cancellation is cooperative: pass a L{numseq.cancel.CancelToken} and cancel
    it from elsewhere, or pass a C{timeout} in seconds. Returns the number of
    values written.
    """
    op = x.copy()
    if cancel is None:
        cancel = _cancel.CancelToken(timeout=timeout)
    elif timeout is not None:
        raise ValueError('Specify cancel or timeout, not both.')
    api_env = _api_env()
    env = _env.Environment(stdout=stdout,
                           cancel=cancel,
                           check_interval=api_env.check_interval,
                           trace=api_env.trace)
    return op.execute(env)


def text(x, cancel=None, timeout=None):
    output = _io.StringIO()
    run(x, stdout=output, cancel=cancel, timeout=timeout)
    return output.getvalue()


# Utilities

def _api_env():
    global _ENV
    if _ENV is None:
        _ENV = _env.Environment.create()
        _atexit.register(_ENV.trace.disable)
    return _ENV
