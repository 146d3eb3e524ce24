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

import numseq.cancel
import numseq.exception
import numseq.opmodule
import numseq.sequence


CHECK_INTERVAL_VAR = 'NUMSEQ_CHECK_INTERVAL'
TRACE_VAR = 'NUMSEQ_TRACE'


class Environment(object):

    def __init__(self,
                 stdout=None,
                 stderr=None,
                 cancel=None,
                 check_interval=numseq.sequence.CHECK_INTERVAL,
                 trace=None):
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.cancel = cancel if cancel is not None else numseq.cancel.CancelToken()
        self.check_interval = numseq.sequence.validate_check_interval(check_interval)
        self.trace = trace if trace else Trace()
        self.op_modules = numseq.opmodule.import_op_modules()

    def __repr__(self):
        return f'Environment(check_interval={self.check_interval}, cancel={self.cancel}, trace={self.trace})'

    @classmethod
    def create(cls, stdout=None, stderr=None, cancel=None, environ=None):
        if environ is None:
            environ = os.environ
        check_interval = Environment.check_interval_setting(environ)
        trace = Trace()
        trace_target = environ.get(TRACE_VAR, None)
        if trace_target:
            trace.enable(sys.stderr if trace_target == 'stderr' else trace_target)
        return cls(stdout=stdout,
                   stderr=stderr,
                   cancel=cancel,
                   check_interval=check_interval,
                   trace=trace)

    @staticmethod
    def check_interval_setting(environ):
        setting = environ.get(CHECK_INTERVAL_VAR, None)
        if setting is None:
            return numseq.sequence.CHECK_INTERVAL
        try:
            return int(setting)
        except ValueError:
            raise numseq.exception.KillCommandException(f'{CHECK_INTERVAL_VAR} must be an int: {setting}')


class Trace(object):

    def __init__(self):
        self.tracefile = None
        self.description = None

    def __repr__(self):
        return f'Trace({self.description})' if self.tracefile else 'Trace(off)'

    def is_enabled(self):
        return self.tracefile is not None

    def enable(self, target):
        if target is sys.stderr:
            self.tracefile = sys.stderr
            self.description = 'stderr'
        else:
            try:
                self.tracefile = open(target, 'a')
                self.description = target
            except OSError as e:
                raise numseq.exception.KillCommandException(
                    f'Unable to start tracing to {target}: {e}')

    def disable(self):
        if self.tracefile and self.tracefile is not sys.stderr:
            self.tracefile.close()
        self.tracefile = None
        self.description = None

    # output argument: output from the execution of the op
    def write(self, phase, op, output=None):
        assert self.tracefile
        if output is None:
            print(f'{op} {phase}', file=self.tracefile, flush=True)
        else:
            print(f'{op} {phase} -> {output}', file=self.tracefile, flush=True)
