import io
import shlex
import sys
import time

import dill.source

import numseq.exception
import numseq.main


TEST_TIMING = False


def timeit(f):
    def timetest():
        start = time.time()
        f()
        stop = time.time()
        usec = (stop - start) * 1000000
        print(f'TEST TIMING -- {f.__name__}: {usec}')
    timetest.__name__ = f.__name__
    return timetest if TEST_TIMING else f


class TestBase:

    # Not a pytest test class
    __test__ = False

    def __init__(self):
        self.failures = 0

    # A failed check is counted, for script usage, and raised, for pytest.
    def fail(self, test, message):
        description = f'{self.description(test)} failed: {message}'
        print(description, file=sys.__stdout__)
        self.failures += 1
        raise AssertionError(description)

    def description(self, x):
        if isinstance(x, str):
            return x
        if isinstance(x, (list, tuple)):
            return ' '.join(str(a) for a in x)
        try:
            return dill.source.getsource(x).split('\n')[0].strip()
        except (OSError, TypeError, IndexError):
            return repr(x)

    def check_ok(self, test, expected, actual):
        if expected != actual:
            self.fail(test, f'\n    expected:\n<<<{expected!r}>>>\n    actual:\n<<<{actual!r}>>>')

    def check_substring(self, test, expected, actual):
        if expected not in actual:
            self.fail(test, f'Expected substring not found in actual:'
                            f'\n    expected:\n<<<{expected}>>>\n    actual:\n<<<{actual}>>>')

    def report_failures(self, label):
        print(f'{self.failures} failures: {label}')


class TestConsole(TestBase):
    """Runs command lines through the console entry point, capturing output."""

    def run(self,
            test,
            expected_out=None,
            expected_err=None,
            expected_status=None,
            environ=None):
        args = shlex.split(test) if isinstance(test, str) else list(test)
        stdout = io.StringIO()
        stderr = io.StringIO()
        status = numseq.main.main(argv=args,
                                  stdout=stdout,
                                  stderr=stderr,
                                  environ=environ if environ is not None else {})
        actual_out = stdout.getvalue()
        actual_err = stderr.getvalue()
        if expected_err is None:
            if len(actual_err) > 0:
                self.fail(test, f'Unexpected error: {actual_err}')
            if status != numseq.main.SUCCESS:
                self.fail(test, f'Unexpected exit status: {status}')
        else:
            self.check_substring(test, expected_err, actual_err)
            if status == numseq.main.SUCCESS:
                self.fail(test, 'Expected failure, but exit status indicates success')
        if expected_status is not None and status != expected_status:
            self.fail(test, f'Expected exit status {expected_status}, got {status}')
        if expected_out is not None:
            self.check_ok(test, expected_out, actual_out)
        return actual_out


class TestAPI(TestBase):
    """Runs callables, checking either the value returned or the exception raised."""

    def run(self,
            test,
            expected_out=None,
            expected_err=None,
            expected_exception=None):
        try:
            actual = test()
        except numseq.exception.KillCommandException as e:
            if expected_err is None and expected_exception is None:
                self.fail(test, f'Terminated by {type(e).__name__}: {e}')
            if expected_exception is not None and not isinstance(e, expected_exception):
                self.fail(test, f'Expected {expected_exception.__name__}, got {type(e).__name__}: {e}')
            if expected_err is not None:
                self.check_substring(test, expected_err, str(e))
            return None
        if expected_err is not None or expected_exception is not None:
            self.fail(test, f'Expected an exception, but got {actual!r}')
        if expected_out is not None:
            self.check_ok(test, expected_out, actual)
        return actual


def run_tests(test, label, tests):
    for t in tests:
        try:
            t()
        except AssertionError:
            # Already reported and counted
            pass
    test.report_failures(label)
    sys.exit(test.failures)
