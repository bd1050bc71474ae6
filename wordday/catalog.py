# wordday/catalog.py
from __future__ import annotations

from datetime import date as date_cls, timedelta
from typing import Sequence

from .schema import Source, WordRecord, WordTemplate


class ConfigurationError(Exception):
    """Raised when the service is wired with unusable static data."""


class CatalogEmptyError(ConfigurationError):
    """Raised when a word is selected from an empty catalog."""


def _w(word, phonetic, definition, translation, examples, level) -> WordTemplate:
    return WordTemplate(
        word=word,
        phonetic=phonetic,
        definition=definition,
        translation=translation,
        examples=tuple(examples),
        level=level,
    )


# Curated "smart word bank": served when AI generation is skipped or fails.
CURATED_WORDS: tuple[WordTemplate, ...] = (
    _w("articulate", "/ɑːrˈtɪkjələt/",
       "Having or showing the ability to speak fluently and coherently",
       "articulado, elocuente",
       ["She's very articulate when explaining complex topics.",
        "The speaker gave an articulate presentation on climate change.",
        "He struggled to articulate his feelings about the situation."], "C1"),
    _w("comprehensive", "/ˌkɑːmprɪˈhensɪv/",
       "Complete and including everything that is necessary",
       "completo, exhaustivo",
       ["The report provides a comprehensive analysis of the market.",
        "She has comprehensive knowledge of European history.",
        "The insurance policy offers comprehensive coverage."], "B2"),
    _w("substantial", "/səbˈstænʃəl/",
       "Of considerable importance, size, or worth",
       "sustancial, considerable",
       ["There has been substantial progress in medical research.",
        "The company made substantial investments in new technology.",
        "She received a substantial salary increase this year."], "B2"),
    _w("inevitable", "/ɪnˈevɪtəbəl/",
       "Certain to happen; unavoidable",
       "inevitable, ineludible",
       ["Change is inevitable in any growing organization.",
        "It was inevitable that they would eventually meet.",
        "The economic downturn seemed inevitable after the crisis."], "C1"),
    _w("contemporary", "/kənˈtempəreri/",
       "Belonging to or occurring in the present time",
       "contemporáneo, actual",
       ["Contemporary art often challenges traditional concepts.",
        "She studies contemporary literature at university.",
        "The building combines classical and contemporary styles."], "C1"),
    _w("fundamental", "/ˌfʌndəˈmentəl/",
       "Forming a necessary base or core; of central importance",
       "fundamental, básico",
       ["Reading is fundamental to academic success.",
        "There are fundamental differences between the approaches.",
        "Understanding grammar is fundamental to learning languages."], "B2"),
    _w("significant", "/sɪɡˈnɪfɪkənt/",
       "Sufficiently great or important to be worthy of attention",
       "significativo, importante",
       ["There was a significant improvement in her performance.",
        "The discovery has significant implications for medicine.",
        "He made significant contributions to physics."], "B2"),
    _w("elaborate", "/ɪˈlæbərət/",
       "Involving many carefully arranged parts or details",
       "elaborado, detallado",
       ["She prepared an elaborate dinner for the guests.",
        "The plan was too elaborate to implement easily.",
        "Could you elaborate on your previous statement?"], "C1"),
    _w("authentic", "/ɔːˈθentɪk/",
       "Of undisputed origin; genuine",
       "auténtico, genuino",
       ["The restaurant serves authentic Italian cuisine.",
        "She has an authentic passion for helping others.",
        "The painting was confirmed to be authentic."], "B2"),
    _w("prominent", "/ˈprɑːmɪnənt/",
       "Important; famous; standing out so as to be seen easily",
       "prominente, destacado",
       ["She's a prominent figure in the tech industry.",
        "The building has a prominent position downtown.",
        "Environmental issues played a prominent role."], "C1"),
    _w("coherent", "/koʊˈhɪrənt/",
       "Logical and consistent; easy to understand",
       "coherente, lógico",
       ["She presented a coherent argument for the proposal.",
        "The book lacks a coherent structure.",
        "His explanation was clear and coherent."], "C1"),
    _w("persistent", "/pərˈsɪstənt/",
       "Continuing firmly despite difficulty or opposition",
       "persistente, constante",
       ["She was persistent in her efforts to learn.",
        "The persistent rain caused flooding.",
        "His persistent questions got him answers."], "B2"),
    _w("versatile", "/ˈvɜːrsətaɪl/",
       "Able to adapt to many different functions or activities",
       "versátil, polivalente",
       ["This versatile tool can be used for many tasks.",
        "She's a versatile actress who can play any role.",
        "The ingredient works in sweet and savory dishes."], "B2"),
    _w("innovative", "/ˈɪnəveɪtɪv/",
       "Featuring new methods; advanced and original",
       "innovador, novedoso",
       ["The company has an innovative approach to technology.",
        "She came up with an innovative solution.",
        "This innovative design revolutionized the industry."], "B2"),
    _w("sophisticated", "/səˈfɪstɪkeɪtɪd/",
       "Having great knowledge or experience; complex and refined",
       "sofisticado, refinado",
       ["The restaurant offers sophisticated cuisine.",
        "She has sophisticated understanding of politics.",
        "The software uses sophisticated algorithms."], "C1"),
    _w("compelling", "/kəmˈpelɪŋ/",
       "Evoking interest, attention, or admiration powerfully",
       "convincente, atractivo",
       ["She made a compelling argument for change.",
        "The documentary presents compelling evidence.",
        "His story was compelling and moving."], "C1"),
    _w("distinctive", "/dɪˈstɪŋktɪv/",
       "Characteristic of one person or thing; distinguishing",
       "distintivo, característico",
       ["The building has a distinctive architectural style.",
        "She has a distinctive way of speaking.",
        "The wine has a distinctive flavor."], "B2"),
    _w("exceptional", "/ɪkˈsepʃənəl/",
       "Unusually good; outstanding",
       "excepcional, extraordinario",
       ["She showed exceptional talent in mathematics.",
        "The service at the restaurant was exceptional.",
        "These are exceptional circumstances."], "B2"),
    _w("magnificent", "/mæɡˈnɪfɪsənt/",
       "Extremely beautiful, elaborate, or impressive",
       "magnífico, espléndido",
       ["The cathedral has a magnificent interior.",
        "She gave a magnificent performance.",
        "The view from the mountain was magnificent."], "B2"),
    _w("tremendous", "/trɪˈmendəs/",
       "Very great in amount, scale, or intensity",
       "tremendo, enorme",
       ["The project required tremendous effort.",
        "She has tremendous respect for her mentor.",
        "There was tremendous excitement in the crowd."], "B2"),
    _w("extraordinary", "/ɪkˈstrɔːrdəneri/",
       "Very unusual or remarkable",
       "extraordinario, excepcional",
       ["She has extraordinary musical talent.",
        "The rescue was an extraordinary feat.",
        "These are extraordinary times."], "C1"),
    _w("remarkable", "/rɪˈmɑːrkəbəl/",
       "Worthy of attention; striking",
       "notable, extraordinario",
       ["She made remarkable progress in just one year.",
        "The recovery was remarkable.",
        "He has a remarkable memory for details."], "B2"),
    _w("outstanding", "/aʊtˈstændɪŋ/",
       "Exceptionally good; clearly noticeable",
       "destacado, sobresaliente",
       ["She received an award for outstanding service.",
        "The team's performance was outstanding.",
        "There are still outstanding issues to resolve."], "B2"),
    _w("phenomenal", "/fəˈnɑːmənəl/",
       "Very remarkable; extraordinary",
       "fenomenal, extraordinario",
       ["The athlete's speed is phenomenal.",
        "The company achieved phenomenal growth.",
        "She has a phenomenal ability to learn languages."], "C1"),
    _w("spectacular", "/spekˈtækjələr/",
       "Beautiful in a dramatic and eye-catching way",
       "espectacular, impresionante",
       ["The sunset was absolutely spectacular.",
        "The fireworks display was spectacular.",
        "She made a spectacular comeback."], "B2"),
    _w("incredible", "/ɪnˈkredəbəl/",
       "Impossible to believe; extraordinary",
       "increíble, extraordinario",
       ["The view from the top was incredible.",
        "She has incredible patience with children.",
        "The team's comeback was incredible."], "B2"),
    _w("astonishing", "/əˈstɑːnɪʃɪŋ/",
       "Extremely surprising or impressive",
       "asombroso, sorprendente",
       ["The magician's tricks were astonishing.",
        "She made astonishing progress in her recovery.",
        "The results were absolutely astonishing."], "C1"),
    _w("breathtaking", "/ˈbreθteɪkɪŋ/",
       "Astonishing or awe-inspiring in quality",
       "impresionante, que quita el aliento",
       ["The mountain scenery was breathtaking.",
        "She gave a breathtaking performance.",
        "The architecture is absolutely breathtaking."], "C1"),
)

# Offline word list: served while the database is unreachable and used by
# search/history when the store has nothing to offer.
FALLBACK_WORDS: tuple[WordTemplate, ...] = (
    _w("serendipity", "/ˌserənˈdɪpɪti/",
       "The occurrence of events by chance in a happy or beneficial way",
       "casualidad afortunada, chiripa",
       ["Meeting you here was pure serendipity!",
        "It was serendipity that led me to find this amazing café.",
        "Sometimes the best discoveries happen through serendipity."], "C1"),
    _w("procrastinate", "/prəˈkræstɪneɪt/",
       "To delay or postpone action; to put off doing something",
       "procrastinar, postergar",
       ["I tend to procrastinate when I have difficult tasks.",
        "Don't procrastinate on your homework anymore!",
        "She always procrastinates until the last minute."], "B2"),
    _w("eloquent", "/ˈeləkwənt/",
       "Fluent and persuasive in speaking or writing",
       "elocuente, persuasivo",
       ["Her eloquent speech moved the entire audience.",
        "He's quite eloquent when discussing his passions.",
        "The lawyer made an eloquent argument in court."], "C1"),
    _w("resilient", "/rɪˈzɪliənt/",
       "Able to recover quickly from difficult conditions",
       "resistente, resiliente",
       ["Children are remarkably resilient creatures.",
        "The city proved resilient after the natural disaster.",
        "You need to be resilient to succeed in business."], "B2"),
    _w("ubiquitous", "/juːˈbɪkwɪtəs/",
       "Present, appearing, or found everywhere",
       "omnipresente, ubicuo",
       ["Smartphones have become ubiquitous in modern society.",
        "Coffee shops are ubiquitous in this neighborhood.",
        "Social media is ubiquitous among young people."], "C1"),
    _w("ambiguous", "/æmˈbɪɡjuəs/",
       "Open to more than one interpretation; not having one obvious meaning",
       "ambiguo, poco claro",
       ["His response was deliberately ambiguous.",
        "The contract terms are too ambiguous.",
        "She gave an ambiguous answer to avoid conflict."], "B2"),
    _w("ephemeral", "/ɪˈfemərəl/",
       "Lasting for a very short time",
       "efímero, pasajero",
       ["The beauty of cherry blossoms is ephemeral.",
        "Fame can be quite ephemeral in today's world.",
        "Their happiness felt ephemeral but intense."], "C1"),
    _w("meticulous", "/mɪˈtɪkjələs/",
       "Showing great attention to detail; very careful and precise",
       "meticuloso, minucioso",
       ["She's meticulous about keeping her workspace organized.",
        "The detective conducted a meticulous investigation.",
        "His meticulous planning ensured the project's success."], "B2"),
    _w("pragmatic", "/præɡˈmætɪk/",
       "Dealing with things sensibly and realistically",
       "pragmático, práctico",
       ["We need a pragmatic approach to solve this problem.",
        "She's very pragmatic when making business decisions.",
        "His pragmatic advice helped us avoid costly mistakes."], "C1"),
    _w("versatile", "/ˈvɜːrsətaɪl/",
       "Able to adapt or be adapted to many different functions or activities",
       "versátil, polivalente",
       ["This versatile tool can be used for many tasks.",
        "She's a versatile actress who can play any role.",
        "The versatile ingredient works in both sweet and savory dishes."], "B2"),
    _w("innovative", "/ˈɪnəveɪtɪv/",
       "Featuring new methods; advanced and original",
       "innovador, novedoso",
       ["The company is known for its innovative approach to technology.",
        "She came up with an innovative solution to the problem.",
        "This innovative design has revolutionized the industry."], "B2"),
    _w("sophisticated", "/səˈfɪstɪkeɪtɪd/",
       "Having great knowledge or experience; complex and refined",
       "sofisticado, refinado",
       ["The restaurant offers sophisticated cuisine from around the world.",
        "She has a sophisticated understanding of international politics.",
        "The software uses sophisticated algorithms to analyze data."], "C1"),
)

# fallback words are listed as the daily words of consecutive days from here
FALLBACK_EPOCH = date_cls(2024, 1, 1)


def date_hash(ymd: str) -> int:
    """Sum of the numeric parts of a YYYY-MM-DD string (no calendar check)."""
    return sum(int(part) for part in ymd.split("-"))


def pick_index_for_date(ymd: str, modulo: int) -> int:
    return date_hash(ymd) % modulo


def to_record(template: WordTemplate, ymd: str, source: Source) -> WordRecord:
    return WordRecord(
        date=ymd,
        word=template.word,
        phonetic=template.phonetic,
        definition=template.definition,
        translation=template.translation,
        examples=list(template.examples),
        level=template.level,
        source=source,
    )


def select_for_date(ymd: str, catalog: Sequence[WordTemplate], source: Source) -> WordRecord:
    """
    Pick the catalog entry for a date.

    The same date always maps to the same entry of a given catalog. Dates whose
    digit sums agree modulo len(catalog) share an entry.
    """
    if not catalog:
        raise CatalogEmptyError("Cannot select a word from an empty catalog")
    return to_record(catalog[pick_index_for_date(ymd, len(catalog))], ymd, source)


def recent_from_catalog(days: int, catalog: Sequence[WordTemplate] = FALLBACK_WORDS) -> list[WordRecord]:
    out: list[WordRecord] = []
    for i, template in enumerate(catalog[:max(0, days)]):
        ymd = (FALLBACK_EPOCH + timedelta(days=i)).isoformat()
        out.append(to_record(template, ymd, "manual"))
    return out


def search_catalog(query: str, catalog: Sequence[WordTemplate] = FALLBACK_WORDS) -> list[WordRecord]:
    q = query.lower()
    out: list[WordRecord] = []
    for i, template in enumerate(catalog):
        if q in template.word.lower() or q in template.definition.lower() or q in template.translation.lower():
            ymd = (FALLBACK_EPOCH + timedelta(days=i)).isoformat()
            out.append(to_record(template, ymd, "manual"))
    return out
