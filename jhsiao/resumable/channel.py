"""Rendezvous channel between a controller and a worker.

The channel holds at most one message.  send() blocks until the
message has been received, so each send/recv pair is a hand-off: the
sender does not continue until the receiver has the message, and
everything the sender did before sending is visible to the receiver.

Protocol messages:
    Finished(outcome): worker -> controller, the read is done.
    SUSPENDED: worker -> controller, the worker is parked.
    CONTINUE: controller -> worker, unpark.
"""
__all__ = ['Channel', 'Finished', 'SUSPENDED', 'CONTINUE']
import threading

class _Message(object):
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.name

SUSPENDED = _Message('SUSPENDED')
CONTINUE = _Message('CONTINUE')

class Finished(object):
    """The reading algorithm returned or raised.

    outcome: an `outcome.Value` or `outcome.Error`.
    """
    def __init__(self, outcome):
        self.outcome = outcome

    def __repr__(self):
        return 'Finished({!r})'.format(self.outcome)


class Channel(object):
    """Unbuffered hand-off for exactly two parties."""
    def __init__(self):
        self.cond = threading.Condition()
        self.slot = []
        self.sent = 0
        self.received = 0

    def send(self, message):
        """Put message in the channel and wait for it to be received."""
        with self.cond:
            while self.slot:
                self.cond.wait()
            self.slot.append(message)
            self.sent += 1
            ticket = self.sent
            self.cond.notify_all()
            while self.received < ticket:
                self.cond.wait()

    def recv(self, timeout=None):
        """Wait for a message and take it.

        Raise TimeoutError if timeout (seconds) expires first.
        """
        with self.cond:
            if not self.cond.wait_for(self._predicate, timeout):
                raise TimeoutError('No message after {}s'.format(timeout))
            message = self.slot.pop()
            self.received += 1
            self.cond.notify_all()
            return message

    def _predicate(self):
        return self.slot
