from __future__ import annotations

import random
from typing import Iterable

FIRST_NAMES = [
    "Alex", "Andrei", "Arthur", "Ben", "Borna", "Camilo", "Casper", "Daniel", "Diego", "Dominik",
    "Emil", "Felix", "Filip", "Flavio", "Gael", "Grigor", "Hubert", "Hugo", "Jack", "Jan",
    "Jannik", "Jiri", "Jordan", "Karen", "Kei", "Lorenzo", "Luca", "Marcos", "Mariano", "Matteo",
    "Miomir", "Nicolas", "Nuno", "Pablo", "Pedro", "Rafael", "Reilly", "Roberto", "Sebastian", "Stan",
    "Taro", "Tallon", "Thanasi", "Tomas", "Ugo", "Valentin", "Yannick", "Yoshi", "Zhizhen", "Zizou",
    "Adrian", "Aleks", "Bruno", "Cedric", "Dusan", "Elias", "Fabio", "Gilles", "Henri", "Ivo",
    "Jonas", "Kamil", "Lukas", "Marin", "Nikola", "Oscar", "Pierre", "Quentin", "Radu", "Soren",
]

LAST_NAMES = [
    "Albot", "Baez", "Bautista", "Bonzi", "Cachin", "Carballes", "Cerundolo", "Cilic", "Coria", "Daniel",
    "Davidovich", "Djere", "Draper", "Etcheverry", "Fils", "Fognini", "Galan", "Gasquet", "Giron", "Goffin",
    "Halys", "Hanfmann", "Humbert", "Ivashka", "Jarry", "Karatsev", "Kecmanovic", "Kokkinakis", "Korda", "Kovacevic",
    "Lajovic", "Lehecka", "Lestienne", "Machac", "Mannarino", "Marozsan", "Michelsen", "Monfils", "Moutet", "Munar",
    "Nakashima", "Nardi", "Navone", "Nishioka", "Norrie", "Ofner", "Opelka", "Paul", "Popyrin", "Purcell",
    "Ramos", "Rinderknech", "Rune", "Safiullin", "Seyboth", "Shapovalov", "Shelton", "Sonego", "Struff", "Thompson",
    "Tabilo", "Tirante", "Vavassori", "Varillas", "Vukic", "Wawrinka", "Wolf", "Zapata", "Zeppieri", "Zhang",
]


class NameGenerator:
    """Deterministic tour names; a surname repeats only once every surname is taken."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._used: set[str] = set()
        self._surnames = list(LAST_NAMES)
        self._rng.shuffle(self._surnames)

    def reserve(self, names: Iterable[str]) -> None:
        for name in names:
            self._used.add(name)
            surname = name.split()[-1]
            if surname in self._surnames:
                self._surnames.remove(surname)

    def next_name(self) -> str:
        if len(self._used) >= len(FIRST_NAMES) * len(LAST_NAMES):
            raise ValueError("Name pool exhausted.")
        while True:
            last = self._surnames.pop() if self._surnames else self._rng.choice(LAST_NAMES)
            name = f"{self._rng.choice(FIRST_NAMES)} {last}"
            if name not in self._used:
                self._used.add(name)
                return name
