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

import numseq.exception
import numseq.util


class AbstractOp(object):

    def setup(self, env):
        pass


class Op(AbstractOp):

    def __init__(self):
        super().__init__()

    def __repr__(self):
        assert False, self.op_name()

    # AbstractOp

    def setup(self, env):
        pass

    # Op

    # Validate everything in setup, so that a failing op produces no output.
    def execute(self, env):
        trace = env.trace
        try:
            if trace.is_enabled():
                trace.write('SETUP', self)
            self.setup(env)
            if trace.is_enabled():
                trace.write('RUN', self)
            result = self.run(env)
            if trace.is_enabled():
                trace.write('DONE', self, result)
            return result
        except numseq.exception.KillCommandException as e:
            if trace.is_enabled():
                trace.write('FAILED', self, f'{type(e).__name__}: {e}')
            raise

    def run(self, env):
        raise NotImplementedError()

    def copy(self):
        return numseq.util.copy(self)

    @classmethod
    def op_name(cls):
        return cls.__name__.lower()
