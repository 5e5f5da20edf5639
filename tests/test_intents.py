"""Tests for the keyboard-to-intent mapping."""
from racer.intents import (
    KEY_A, KEY_D, KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_S, KEY_UP, KEY_W,
    NO_INTENTS, Intents, intents_from_keys,
)


def test_no_keys_no_intents():
    assert intents_from_keys(set()) == NO_INTENTS


def test_arrow_keys():
    assert intents_from_keys({KEY_LEFT, KEY_UP}) == Intents(steer_left=True, accelerate=True)
    assert intents_from_keys({KEY_RIGHT, KEY_DOWN}) == Intents(steer_right=True, brake=True)


def test_wasd_keys():
    assert intents_from_keys({KEY_A, KEY_W}) == Intents(steer_left=True, accelerate=True)
    assert intents_from_keys({KEY_D, KEY_S}) == Intents(steer_right=True, brake=True)


def test_conflicting_keys_are_all_reported():
    intents = intents_from_keys({KEY_LEFT, KEY_RIGHT, KEY_UP, KEY_DOWN})
    assert intents == Intents(True, True, True, True)


def test_unrelated_keys_ignored():
    assert intents_from_keys({32, 65307}) == NO_INTENTS
