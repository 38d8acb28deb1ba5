from monkey.environment import Environment
from monkey.types import Integer


def test_get_missing_name():
    env = Environment()
    assert env.get('x') == (None, False)


def test_set_returns_value_and_binds_locally():
    env = Environment()
    assert env.set('x', Integer(1)) == Integer(1)
    assert env.get('x') == (Integer(1), True)


def test_enclosed_environment_reads_outer_scope():
    outer = Environment()
    outer.set('x', Integer(1))
    inner = Environment.new_enclosed(outer)
    assert inner.get('x') == (Integer(1), True)


def test_enclosed_set_shadows_without_touching_outer():
    outer = Environment()
    outer.set('x', Integer(1))
    inner = Environment.new_enclosed(outer)
    inner.set('x', Integer(2))
    assert inner.get('x') == (Integer(2), True)
    assert outer.get('x') == (Integer(1), True)


def test_outer_updates_are_visible_through_reference():
    outer = Environment()
    inner = Environment.new_enclosed(outer)
    outer.set('late', Integer(3))
    assert inner.get('late') == (Integer(3), True)
