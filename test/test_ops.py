import io
import os
import signal
import tempfile
import threading
import time

import numseq.cancel
import numseq.env
import numseq.main
import numseq.version

import test_base

timeit = test_base.timeit

TEST = test_base.TestConsole()
FAILURE = numseq.main.FAILURE


@timeit
def test_seq():
    TEST.run('5',
             expected_out='1\n2\n3\n4\n5\n')
    TEST.run('2 5',
             expected_out='2\n3\n4\n5\n')
    TEST.run('1 2 10',
             expected_out='1\n3\n5\n7\n9\n')
    TEST.run('10 -2 1',
             expected_out='10\n8\n6\n4\n2\n')
    TEST.run('1.5 0.5 3',
             expected_out='1.5\n2\n2.5\n3\n')
    TEST.run('5 3',
             expected_out='')
    TEST.run('0',
             expected_out='')
    # Negative numbers are not flags
    TEST.run('-5 -1',
             expected_out='-5\n-4\n-3\n-2\n-1\n')
    TEST.run('-10 -5 -20',
             expected_out='-10\n-15\n-20\n')
    TEST.run('-1e1 -1e1',
             expected_out='-10\n')


@timeit
def test_flags():
    TEST.run('-s , 1 3',
             expected_out='1,2,3\n')
    TEST.run("--separator ' | ' 1 3",
             expected_out='1 | 2 | 3\n')
    # A flag's value is taken as is, even if it looks like a flag.
    TEST.run('-s -- 1 3',
             expected_out='1--2--3\n')
    TEST.run('-s -w 1 3',
             expected_out='1-w2-w3\n')
    TEST.run('-w 8 12',
             expected_out='08\n09\n10\n11\n12\n')
    TEST.run('--equal-width 98 102',
             expected_out='098\n099\n100\n101\n102\n')
    TEST.run('--no-equal-width 8 10',
             expected_out='8\n9\n10\n')
    TEST.run('-w -s , 8 10',
             expected_out='08,09,10\n')
    TEST.run('-f %.2e 1000 1000 3000',
             expected_out='1.00e+03\n2.00e+03\n3.00e+03\n')
    TEST.run('--format %.2f 1 3',
             expected_out='1.00\n2.00\n3.00\n')
    TEST.run('-f %.2f -w 8 10',
             expected_out='08\n09\n10\n')


@timeit
def test_errors():
    TEST.run('',
             expected_err='seq: missing arguments',
             expected_status=FAILURE)
    TEST.run('1 2 3 4',
             expected_err='seq: too many arguments')
    TEST.run('abc',
             expected_err="seq: invalid number: 'abc'")
    TEST.run('1 abc 5',
             expected_err="seq: invalid number: 'abc'")
    TEST.run('1 0 5',
             expected_err='seq: increment cannot be zero')
    TEST.run('inf',
             expected_err='not a finite number')
    TEST.run('-f %d%d 1 3',
             expected_err="seq: invalid format '%d%d'")
    TEST.run('-f %d 1 0.5 2',
             expected_out='',
             expected_err="seq: invalid format '%d': %d is an integer conversion")
    # Usage errors
    TEST.run('-x 5',
             expected_err='Unknown flag -x')
    TEST.run('-x 5',
             expected_err='usage: seq [-s|--separator SEP]')
    TEST.run('5 -w',
             expected_err='Flags must all appear before the first anonymous arg')
    TEST.run('-w --no-equal-width 5',
             expected_err='Cannot specify more than one of {--no-equal-width, -w|--equal-width}')
    TEST.run('-s',
             expected_err='-s|--separator requires a value.')
    TEST.run('-s , -s ; 5',
             expected_err='-s specified more than once.')
    TEST.run('--separator , -s ; 5',
             expected_err='-s specified more than once.')
    # Nothing is written when an argument is bad
    TEST.run('1 2 x',
             expected_out='',
             expected_err='invalid number')


@timeit
def test_help_and_version():
    out = TEST.run('-h')
    TEST.check_ok('-h', True, out.startswith('seq [-s|--separator SEP]'))
    out = TEST.run('--help')
    TEST.check_ok('--help', True, 'INCREMENT must not be zero' in out)
    TEST.run('--version',
             expected_out=f'seq {numseq.version.VERSION}\n')


@timeit
def test_configuration():
    TEST.run('3',
             expected_out='1\n2\n3\n',
             environ={'NUMSEQ_CHECK_INTERVAL': '1'})
    TEST.run('3',
             expected_err='seq: Cancellation check interval must be an int in [1, 100000]: 0',
             environ={'NUMSEQ_CHECK_INTERVAL': '0'})
    TEST.run('3',
             expected_err='seq: NUMSEQ_CHECK_INTERVAL must be an int: abc',
             environ={'NUMSEQ_CHECK_INTERVAL': 'abc'})


@timeit
def test_trace():
    with tempfile.TemporaryDirectory() as tmp:
        tracefile = os.path.join(tmp, 'trace.txt')
        TEST.run('1 3',
                 expected_out='1\n2\n3\n',
                 environ={'NUMSEQ_TRACE': tracefile})
        TEST.run('-s , 1 0 3',
                 expected_err='increment cannot be zero',
                 environ={'NUMSEQ_TRACE': tracefile})
        with open(tracefile) as file:
            trace = file.read()
    TEST.check_substring('trace', 'seq(1, 3) SETUP', trace)
    TEST.check_substring('trace', 'seq(1, 3) RUN', trace)
    TEST.check_substring('trace', 'seq(1, 3) DONE -> 3', trace)
    TEST.check_substring('trace', "seq(1, 0, 3, separator=',') FAILED -> ZeroIncrement: increment cannot be zero", trace)
    TEST.run('3',
             expected_err='Unable to start tracing to /nonexistent/dir/trace.txt',
             environ={'NUMSEQ_TRACE': '/nonexistent/dir/trace.txt'})


@timeit
def test_write_failure():
    stdout = io.StringIO()
    stdout.close()
    stderr = io.StringIO()
    status = numseq.main.main(argv=['3'], stdout=stdout, stderr=stderr, environ={})
    TEST.check_ok('write to closed stdout', FAILURE, status)
    TEST.check_substring('write to closed stdout', 'seq: write error', stderr.getvalue())


@timeit
def test_ctrl_c():
    original = signal.getsignal(signal.SIGINT)
    token = numseq.cancel.CancelToken()
    with numseq.cancel.SigintCanceller(token):
        TEST.check_ok('handler installed', True, signal.getsignal(signal.SIGINT) is not original)
        os.kill(os.getpid(), signal.SIGINT)
        deadline = time.monotonic() + 5
        while not token.is_cancelled() and time.monotonic() < deadline:
            time.sleep(0.01)
    TEST.check_ok('ctrl-c cancels', True, token.is_cancelled())
    TEST.check_ok('handler restored', True, signal.getsignal(signal.SIGINT) is original)


@timeit
def test_cancel_from_another_thread():
    token = numseq.cancel.CancelToken()
    stdout = io.StringIO()
    stderr = io.StringIO()
    env = numseq.env.Environment(stdout=stdout, stderr=stderr, cancel=token)
    timer = threading.Timer(0.05, token.cancel)
    timer.start()
    try:
        status = numseq.main.run_command(env, ['1', '1', '100000000'])
    finally:
        timer.cancel()
    TEST.check_ok('cancel from another thread', FAILURE, status)
    TEST.check_ok('cancel from another thread', '', stdout.getvalue())
    TEST.check_ok('cancel from another thread', 'seq: cancelled\n', stderr.getvalue())


def main():
    test_base.run_tests(TEST, 'test_ops', [
        test_seq,
        test_flags,
        test_errors,
        test_help_and_version,
        test_configuration,
        test_trace,
        test_write_failure,
        test_ctrl_c,
        test_cancel_from_another_thread,
    ])


if __name__ == '__main__':
    main()
