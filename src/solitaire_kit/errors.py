"""Exception hierarchy for the solitaire engine.

Errors fall into three groups:

* :class:`ConfError` - a rule description is malformed; raised while a
  :class:`~solitaire_kit.conf.Conf` is loaded or validated.
* :class:`DealError` - the rule description does not add up to the dealt
  deck; raised while a game is being set up.
* :class:`MoveError` - a player action was rejected. These are expected and
  leave the game untouched.
"""

from __future__ import annotations


class SolError(Exception):
    """Base class for every error raised by the package."""

    message = "Solitaire error"

    def __init__(self, *args) -> None:
        self.details = args
        super().__init__(self.message.format(*args))


# ---------- Configuration ----------
class ConfError(SolError):
    message = "Invalid configuration"


class InvalidDeckNumber(ConfError):
    message = "Invalid number of decks: {0}. Must be 1 or 2"


class InvalidTempNumber(ConfError):
    message = "Invalid number of temporary slots: {0}. Must be between 0 and 4"


class InvalidColNumber(ConfError):
    message = "Invalid number of columns: {0}. Must be between 1 and 10"


class InvalidDealBy(ConfError):
    message = "Invalid number of dealt cards at a time: {0}. Must be between 1 and 16"


class InvalidRedeals(ConfError):
    message = "Invalid number of redeals: {0}"


class NoFoundation(ConfError):
    message = "No foundation defined"


class NoFoundationStart(ConfError):
    message = "Foundation cannot start with EMPTY card face"


class NoCols(ConfError):
    message = "No columns defined"


class InvalidSuit(ConfError):
    message = "Invalid card suit: {0}"


class InvalidFace(ConfError):
    message = "Invalid card face: {0}"


class InvalidSuitOrder(ConfError):
    message = "Invalid card suit order: {0}"


class InvalidFaceOrder(ConfError):
    message = "Invalid card face order: {0}"


class InvalidPlayable(ConfError):
    message = "Invalid playable card rule: {0}"


class InvalidConfLine(ConfError):
    message = "Invalid configuration line: {0}"


class InvalidConfSection(ConfError):
    message = "Invalid configuration section {0}"


class InvalidConfOption(ConfError):
    message = "Invalid configuration option {1} of section {0}"


class InvalidConfOptionValue(ConfError):
    message = "Invalid configuration value {1} for option {0}"


class InvalidFileName(ConfError):
    message = "File does not exist: {0}"


class FailedToOpenRules(ConfError):
    message = "Reading rules from file failed: {0}"


# ---------- Dealing ----------
class DealError(SolError):
    message = "Cannot deal the cards"


class InsufficientFor(DealError):
    message = "Insufficient cards in the deck for {0}"


class UnusedCards(DealError):
    message = "Pile is disabled but a few cards are still in the deck"


# ---------- Moves ----------
class MoveError(SolError):
    message = "Move rejected"


class InvalidLocation(MoveError):
    message = "Invalid location"


class InvalidMove(MoveError):
    message = "Invalid move"


class InvalidDestination(InvalidMove):
    message = "Invalid destination"


class Unplayable(InvalidMove):
    message = "Card cannot be moved"


class NotSelected(MoveError):
    message = "No card selected"


class NoDestination(MoveError):
    message = "Card cannot be played"
