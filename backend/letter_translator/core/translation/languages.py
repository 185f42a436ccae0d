"""Language-specific extraction hints.

Each supported source language maps to the script it is usually written in
and a short list of terms and structures the model should prioritise when
reading handwriting in that language.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models.context import SourceLanguage


@dataclass(frozen=True)
class LanguageProfile:
    """Extraction hints for one source language."""

    name: str
    script: str
    hints: List[str] = field(default_factory=list)


LANGUAGE_PROFILES: Dict[SourceLanguage, LanguageProfile] = {
    SourceLanguage.ENGLISH: LanguageProfile(
        name="English",
        script="Latin",
        hints=[
            "Standard letter openings and closings (\"Dear ...\", \"Your friend\", \"With love\")",
            "Sponsor and sponsorship vocabulary (sponsor, sponsored child, project, centre)",
            "Child ID numbers written near the top of the page (letters and digits mixed)",
        ],
    ),
    SourceLanguage.SPANISH: LanguageProfile(
        name="Spanish",
        script="Latin",
        hints=[
            "Kinship terms: abuelo/abuela, tío/tía, padrino/madrina, hermanito/hermanita",
            "Festivals: Navidad, Semana Santa, Día de los Muertos, quinceañera",
            "Standard phrases: \"Que Dios le bendiga\", \"Saludos cordiales\", \"Con cariño\"",
            "Accent marks and ñ that handwriting often drops",
        ],
    ),
    SourceLanguage.FRENCH: LanguageProfile(
        name="French",
        script="Latin",
        hints=[
            "Kinship terms: tonton, tata, grand-mère, parrain/marraine",
            "Festivals: Noël, Pâques, Tabaski, Ramadan, fête de l'indépendance",
            "Standard phrases: \"Que Dieu vous bénisse\", \"Je vous salue\", \"Bisous\"",
            "Accents (é, è, ê, ç) and apostrophe contractions",
        ],
    ),
    SourceLanguage.TELUGU: LanguageProfile(
        name="Telugu",
        script="Telugu",
        hints=[
            "Festivals: Sankranti, Ugadi, Deepavali, Dasara, Vinayaka Chavithi",
            "Kinship terms: Amma, Nanna, Anna, Akka, Thammudu, Chelli, Thatha, Ammamma",
            "Standard phrases: Namaskaram, \"meeru kshemamga unnarani aasistunnanu\"",
            "Vowel signs (matras) and conjunct consonants that change meaning when misread",
        ],
    ),
    SourceLanguage.TAMIL: LanguageProfile(
        name="Tamil",
        script="Tamil",
        hints=[
            "Festivals: Pongal, Deepavali, Tamil Puthandu, Karthigai Deepam",
            "Kinship terms: Amma, Appa, Anna, Akka, Thambi, Thangai, Paati, Thatha",
            "Standard phrases: Vanakkam, \"Nalamaga irukkirom\", \"Kadavul ungalai aasirvathippar\"",
            "Pulli (dot) marks and vowel signs that handwriting often blurs",
        ],
    ),
    SourceLanguage.AMHARIC: LanguageProfile(
        name="Amharic",
        script="Ge'ez (Fidel)",
        hints=[
            "Festivals: Meskel, Timkat, Enkutatash (New Year), Fasika (Easter), Genna (Christmas)",
            "Kinship terms: Abat, Enat, Wendim, Ehit, Ayat",
            "Standard phrases: Selam, \"Egziabher yimesgen\", \"Endet neh/nesh\"",
            "Dates in the Ethiopian calendar; keep them as written and note the calendar",
            "Fidel characters that differ only by a small stroke or ring (vowel orders)",
        ],
    ),
    SourceLanguage.AFAN_OROMO: LanguageProfile(
        name="Afan Oromo",
        script="Latin (Qubee)",
        hints=[
            "Festivals: Irreecha, Ayyaana Masqalaa, Ayyaana Cuuphaa",
            "Kinship terms: Abbaa, Haadha, Obboleessa, Obboleettii, Akaakayyuu",
            "Standard phrases: \"Akkam jirta\", Galatoomi, \"Waaqayyo si haa eebbisu\"",
            "Qubee spelling: doubled vowels and consonants, and the apostrophe (hudhaa) as a glottal stop",
        ],
    ),
}


def get_language_profile(language: SourceLanguage) -> Optional[LanguageProfile]:
    """Profile for a language, or None for Auto-Detect."""
    return LANGUAGE_PROFILES.get(language)
