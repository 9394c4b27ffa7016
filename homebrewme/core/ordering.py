"""Interactive reordering of the processing queue."""

import re
import logging
from typing import List, Sequence, Tuple, TypeVar

from ..utils.ui import Colors

# Set up logging for this module
logger = logging.getLogger(__name__)

T = TypeVar('T')


def parse_selection(selection: str) -> List[str]:
    """Split user input on commas and whitespace"""
    return [token for token in re.split(r'[\s,]+', selection.strip()) if token]


def _as_index(token: str, size: int):
    if token.isdecimal():
        index = int(token)
        if 1 <= index <= size:
            return index - 1
    return None


def reorder(items: Sequence[T], selection: str) -> Tuple[List[T], List[str]]:
    """Reorder items according to a 1-based index selection.

    A single index rotates the queue so that item comes first. Several
    indices move those items to the front in the order given; the rest keep
    their relative order. Invalid tokens are ignored.

    Args:
        items: Current processing order
        selection: Raw user input such as "3" or "4, 1 2"

    Returns:
        Tuple of (new order, invalid tokens)
    """
    items = list(items)
    tokens = parse_selection(selection)
    if not tokens:
        return items, []

    if len(tokens) == 1:
        index = _as_index(tokens[0], len(items))
        if index is None:
            return items, tokens
        return items[index:] + items[:index], []

    chosen = []
    invalid = []
    for token in tokens:
        index = _as_index(token, len(items))
        if index is None:
            invalid.append(token)
        elif index not in chosen:
            chosen.append(index)

    if not chosen:
        return items, invalid

    rest = [i for i in range(len(items)) if i not in chosen]
    return [items[i] for i in chosen + rest], invalid


def print_queue(candidates):
    for i, candidate in enumerate(candidates, 1):
        print(f"{i}) {candidate.display_name}")


def prompt_for_order(candidates, prompt):
    """Show the queue and let the operator pick what to process first"""
    if not candidates:
        return list(candidates)

    print(f"\n{Colors.BOLD}Found the following applications to process:{Colors.RESET}")
    print_queue(candidates)
    selection = prompt.read_line(
        "Enter numbers (separated by commas or spaces) for the apps to process first "
        "(in desired order), or press Enter to keep original order: "
    )

    reordered, invalid = reorder(candidates, selection)
    for token in invalid:
        print(f"{Colors.YELLOW}Invalid index: {token}{Colors.RESET}")

    if reordered != list(candidates):
        print(f"\n{Colors.BOLD}New processing order:{Colors.RESET}")
        print_queue(reordered)
    else:
        logger.debug("Keeping original processing order")
    return reordered
