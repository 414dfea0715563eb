"""
Built-in gala program used whenever no valid saved deck exists.
"""

from typing import List, Tuple

from .slide_store import SlideKind, SlideRecord

CATEGORIES = ["Movies", "Music", "Science", "History", "Campus Life"]

# (question, answer) per category, ordered from 100 to 500
QUESTIONS = {
    "Movies": [
        ("Which film features a ship that hits an iceberg in 1912?", "Titanic"),
        ("What colour pill does Neo take in The Matrix?", "Red"),
        ("Who directed Spirited Away?", "Hayao Miyazaki"),
        ("Which movie won the first Academy Award for Best Animated Feature?", "Shrek"),
        ("In Inception, what object is Cobb's totem?", "A spinning top"),
    ],
    "Music": [
        ("How many lines does a standard music staff have?", "Five"),
        ("Which composer wrote the Moonlight Sonata?", "Beethoven"),
        ("What instrument has 88 keys?", "The piano"),
        ("Which band recorded Bohemian Rhapsody?", "Queen"),
        ("What does 'forte' instruct a musician to do?", "Play loudly"),
    ],
    "Science": [
        ("What gas do plants absorb from the air?", "Carbon dioxide"),
        ("What is the chemical symbol for gold?", "Au"),
        ("Which planet has the most moons known today?", "Saturn"),
        ("What is the speed of light in vacuum, roughly?", "300,000 km/s"),
        ("Which particle carries no electric charge?", "The neutron"),
    ],
    "History": [
        ("Which wall fell in 1989?", "The Berlin Wall"),
        ("Who was the first person to walk on the Moon?", "Neil Armstrong"),
        ("Which empire built Machu Picchu?", "The Inca Empire"),
        ("In which year did the First World War begin?", "1914"),
        ("Which dynasty built most of the Great Wall seen today?", "The Ming dynasty"),
    ],
    "Campus Life": [
        ("Which room do we meet in every Monday morning?", "The main hall"),
        ("How many students are in our class?", "Ask the class monitor!"),
        ("Which club won this year's sports day relay?", "The running club"),
        ("What time does the first bell ring?", "7:40"),
        ("Who is the teacher behind tonight's gala?", "Our head teacher"),
    ],
}

PROGRAM: List[Tuple[SlideKind, str, List[str]]] = [
    (SlideKind.CONTENT, "Opening Remarks", ["A warm welcome from our hosts"]),
    (SlideKind.LIST, "Tonight's Program", [
        "Performances", "Gala Trivia", "Lucky Draw", "Closing Song",
    ]),
    (SlideKind.CONTENT, "Act 1: Class Chorus", ["'Auld Lang Syne'"]),
    (SlideKind.TOP_LEFT, "Act 2: Comic Dialogue", ["The Missing Homework"]),
    (SlideKind.CONTENT, "Act 3: Piano Solo", ["Canon in D"]),
    (SlideKind.SOUP, "A Word for the New Year", [
        "Every ending is a new beginning.",
    ]),
    (SlideKind.CONTENT, "Act 4: Dance", ["Spring Festival Overture"]),
    (SlideKind.TOP_LEFT, "Act 5: Magic Show", ["Now you see it"]),
    (SlideKind.CONTENT, "Act 6: Guitar Duet", ["Country Roads"]),
    (SlideKind.LIST, "Game Time", ["Musical chairs", "Pictionary relay"]),
    (SlideKind.CONTENT, "Act 7: Poetry Reading", ["Ode to Youth"]),
    (SlideKind.SOUP, "A Word for the New Year", [
        "Small steps every day add up to big journeys.",
    ]),
    (SlideKind.CONTENT, "Act 8: Short Play", ["The Night Before the Exam"]),
    (SlideKind.TOP_LEFT, "Act 9: Beatbox", ["Sound check"]),
    (SlideKind.CONTENT, "Act 10: Band Performance", ["Our class band"]),
    (SlideKind.LIST, "Trivia Rules", [
        "Pick a category and a value",
        "Teams answer in turn",
        "Highest score wins a prize",
    ]),
]

CREDITS_LINES = [
    "Acknowledgements",
    "Our head teacher",
    "Every subject teacher",
    "",
    "Cast and Crew",
    "Hosts",
    "Performers",
    "Stage and lighting team",
    "",
    "Thank you all for coming!",
]


def build_default_deck() -> Tuple[SlideRecord, ...]:
    """Return the 45-slide default show (board at 17, questions 18-42)."""
    slides: List[SlideRecord] = []

    def add(kind: SlideKind, title: str, content: List[str], subtitle=None):
        slides.append(SlideRecord(
            id=len(slides) + 1,
            kind=kind,
            title=title,
            subtitle=subtitle,
            content=tuple(content),
        ))

    add(SlideKind.TITLE, "New Year Gala 2026", ["Class 1, Grade 10", "Welcome to the show"])
    for kind, title, content in PROGRAM:
        add(kind, title, content)

    add(SlideKind.BOARD, "Gala Trivia", list(CATEGORIES))
    for category in CATEGORIES:
        for row, (question, answer) in enumerate(QUESTIONS[category]):
            add(SlideKind.CONTENT, f"{category} for {(row + 1) * 100}", [question, answer])

    add(SlideKind.CONTENT, "Back to the Show", ["Lucky draw time!"])
    add(SlideKind.CREDITS, "Thank You", CREDITS_LINES, subtitle="Happy New Year 2026")
    return tuple(slides)
