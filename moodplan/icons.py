"""Icon identifiers shared by tasks, journal entries and the mood affinity table.

The engines treat these as opaque strings; only the UI knows how to draw them.
"""

from __future__ import annotations


# Task categories
WORK = "briefcase.fill"
STUDY = "book.fill"
SPORT = "figure.run"
HEALTH = "heart.fill"
RELAX = "leaf.fill"
TRAVEL = "airplane"
SOCIAL = "person.2.fill"
IDEA = "lightbulb.fill"
FINANCE = "banknote.fill"
HOME = "house.fill"

DEFAULT = "circle"
