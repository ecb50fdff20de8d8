"""Fixed word lists used by the analyzers.

Changing any list changes reported counts; fixtures assert literal values.
"""

# Text analyzer: vague words counted into vague_word_count
METRIC_VAGUE_WORDS = (
    "somehow",
    "something",
    "someone",
    "stuff",
    "things",
    "maybe",
    "perhaps",
    "sort of",
    "kind of",
    "a bit",
    "a little",
    "very",
    "really",
)

# Text analyzer: stock phrases counted into filler_phrase_count
METRIC_FILLER_PHRASES = (
    "small breath",
    "let out a breath",
    "breath he didn't know he was holding",
    "eyes widened",
    "heart pounded",
    "couldn't help but",
    "for a moment",
    "in that moment",
)

# Flag engine: verbs of speech or emotion that signal personification
PERSONIFICATION_VERBS = (
    "begged",
    "whispered",
    "groaned",
    "sighed",
    "gasped",
    "moaned",
    "screamed",
    "cried",
    "pleaded",
    "laughed",
    "sang",
    "wept",
    "sobbed",
    "murmured",
)

# Flag engine: adjectives that give a sound human feeling
SOUND_ADJECTIVES = (
    "mournful",
    "anguished",
    "tortured",
    "plaintive",
    "sorrowful",
    "weary",
    "lonely",
    "angry",
    "desperate",
    "hungry",
)

# Singular and plural forms; "cry" pluralizes irregularly
SOUND_NOUNS = (
    "groan",
    "groans",
    "moan",
    "moans",
    "sigh",
    "sighs",
    "wail",
    "wails",
    "howl",
    "howls",
    "scream",
    "screams",
    "whimper",
    "whimpers",
    "sob",
    "sobs",
    "cry",
    "cries",
    "murmur",
    "murmurs",
)

# Flag engine: vague-language scan (broader than METRIC_VAGUE_WORDS)
VAGUE_WORDS = (
    "somehow",
    "suddenly",
    "really",
    "very",
    "just",
    "kind of",
    "sort of",
    "thing",
    "stuff",
    "wrong",
    "strange",
    "dark",
    "beautiful",
)

ABSTRACT_SIMILE_TARGETS = (
    "sin",
    "evil",
    "darkness",
    "the abyss",
    "death",
    "fate",
    "destiny",
)

MORALIZING_VERBS = ("damn", "save", "ruin", "haunt")

BANNED_PHRASES = (
    "like a dream",
    "like a nightmare",
    "time stood still",
    "in the blink of an eye",
    "cold as ice",
    "dead as a doornail",
    "silence was deafening",
)

FILLER_WORDS = ("very", "really", "just", "somehow")
