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

import os
import sys
import traceback

import dill


DEBUG = False


def debug(message):
    if DEBUG:
        print(f'{os.getpid()}: {message}', file=sys.__stderr__, flush=True)


def one_of(x, types):
    for t in types:
        if isinstance(x, t):
            return True
    return False


def copy(x):
    try:
        return dill.loads(dill.dumps(x))
    except Exception as e:
        sys.stdout.flush()
        print(f'Cloning error on {type(x)}: ({type(e)}) {e}', file=sys.__stderr__, flush=True)
        print_stack_of_current_exception(sys.__stderr__)
        raise


def print_stack_of_current_exception(file=None):
    if file is None:
        file = sys.__stderr__
    exception_type, exception, trace = sys.exc_info()
    print(f'Caught {exception_type}: {exception}', file=file)
    traceback.print_tb(trace, file=file)
    file.flush()


# Utility to print to stderr, flushing stdout first, to minimize weird ordering due to buffering.
def print_to_stderr(message, file=None):
    if file is None:
        file = sys.stderr
    try:
        sys.stdout.flush()
    except (OSError, ValueError):
        # stdout may be the thing that broke
        pass
    print(message, file=file, flush=True)
