from .base import ListSection


class Synonyms(ListSection):
    key = "synonyms"


class Antonyms(ListSection):
    key = "antonyms"


class Idioms(ListSection):
    key = "idioms"


class WordCombinations(ListSection):
    key = "wordCombinations"
