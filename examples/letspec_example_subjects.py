"""Demonstrates lazy, named and eager subjects across nested groups.

Run with ``python examples/letspec_example_subjects.py``.
"""

import itertools

from letspec import Equals, describe, load_config, run
from letspec.reports import ConsoleReporter


counter = itertools.count(1)

stack = describe("Stack")
stack.subject(lambda ctx: [])


@stack.before
def push_three(ctx):
    ctx.subject().extend([1, 2, 3])


@stack.it("starts from a fresh subject in every example")
def _(ctx):
    ctx.is_expected().to(Equals([1, 2, 3]))


@stack.it("sees the same list everywhere within one example")
def _(ctx):
    ctx.subject().append(4)
    ctx.is_expected().to(Equals([1, 2, 3, 4]))


counting = describe("Counting")
counting.subject("count", lambda ctx: next(counter))


@counting.it("computes the named subject once")
def _(ctx):
    assert ctx.count() == 1
    assert ctx.count() == 1
    assert ctx.subject() == 1


@counting.it("computes it again for the next example")
def _(ctx):
    assert ctx.count() == 2


greeting = describe("Greeting")
greeting.let("name", lambda ctx: "world")
greeting.subject(lambda ctx: f"hello {ctx.name()}")
greeting.it("uses the outer name", lambda ctx: ctx.is_expected().to(Equals("hello world")))

polite = greeting.describe("with an inner override")
polite.let("name", lambda ctx: "there")
polite.it("uses the inner name", lambda ctx: ctx.is_expected().to(Equals("hello there")))


audit = describe("Audit log")
audit.let("log", lambda ctx: [])


@audit.subject_eager
def _(ctx):
    ctx.log().append("subject")
    return "ready"


@audit.it("records the eager subject before the body")
def _(ctx):
    ctx.log().append("body")
    assert ctx.log() == ["subject", "body"]


if __name__ == "__main__":
    config = load_config()
    reporter = ConsoleReporter.from_config(config)
    result = run([stack, counting, greeting, audit], reporter=reporter, config=config)
    raise SystemExit(0 if result.ok else 1)
