"""
Estimate words added from the number of characters added.
"""

from typing import Optional

# Average English word length including the following space.
# Changing it changes every Words_added_in_thousands__c value already in Salesforce.
AVERAGE_CHARACTERS_PER_WORD = 5


def from_characters(characters: Optional[int]) -> int:
    """Estimated number of words for a character count."""
    if not characters or characters < 0:
        return 0
    return int(characters / AVERAGE_CHARACTERS_PER_WORD)
