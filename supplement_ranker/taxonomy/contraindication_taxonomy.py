"""
Contraindication taxonomy for supplement safety matching.

Two closed vocabularies drive the safety matcher:
  - ``ContraindicationTag``: the *who*: a health condition or concurrent
    medication that makes an ingredient inadvisable.
  - ``AlertSeverity``      : the *how bad*: critical / warning / info.

``DEFAULT_SEVERITY_MAP`` is the canonical tag → severity contract:
  - Every ``ContraindicationTag`` must have exactly one severity.
  - No tag may be left unmapped (the map is total).

The map is only the default; deployments override it through
``SafetyConfig.severity_map`` in ``config/default.toml``.

This module has NO imports from any other ``supplement_ranker`` package.
"""

from enum import StrEnum


class ContraindicationTag(StrEnum):
    """Health condition or medication that an ingredient may be unsafe for."""

    # ── Life stage ────────────────────────────────────────────────────────────
    PREGNANT = "pregnant"
    BREASTFEEDING = "breastfeeding"
    INFANTS = "infants"
    CHILDREN = "children"
    ELDERLY = "elderly"

    # ── Blood / surgery ───────────────────────────────────────────────────────
    BLOOD_CLOTTING_DISORDER = "blood-clotting-disorder"
    BLEEDING_RISK = "bleeding-risk"
    SURGERY = "surgery"

    # ── Chronic conditions ────────────────────────────────────────────────────
    DIABETES = "diabetes"
    HYPERTENSION = "hypertension"
    HYPOTENSION = "hypotension"
    KIDNEY_DISEASE = "kidney-disease"
    LIVER_DISEASE = "liver-disease"
    HEART_DISEASE = "heart-disease"
    THYROID_DISORDER = "thyroid-disorder"
    AUTOIMMUNE_DISEASE = "autoimmune-disease"
    DIGESTIVE_DISORDER = "digestive-disorder"
    EPILEPSY = "epilepsy"
    MENTAL_DISORDER = "mental-disorder"

    # ── Concurrent medication ─────────────────────────────────────────────────
    ANTICOAGULANT_USE = "anticoagulant-use"
    ANTIPLATELET_USE = "antiplatelet-use"
    ANTIDEPRESSANT_USE = "antidepressant-use"
    IMMUNOSUPPRESSANT_USE = "immunosuppressant-use"
    HORMONE_THERAPY = "hormone-therapy"
    CHEMOTHERAPY = "chemotherapy"

    # ── Allergies ─────────────────────────────────────────────────────────────
    ALLERGY_PRONE = "allergy-prone"
    SHELLFISH_ALLERGY = "shellfish-allergy"
    SOY_ALLERGY = "soy-allergy"
    NUT_ALLERGY = "nut-allergy"


class AlertSeverity(StrEnum):
    """How serious a single contraindication match is."""

    CRITICAL = "critical"
    """Potentially life-threatening; the product should not be used."""

    WARNING = "warning"
    """Needs care; consult a physician before use."""

    INFO = "info"
    """Worth a second look; low expected harm."""


class RiskLevel(StrEnum):
    """Overall product risk for one user, derived by counting alerts."""

    SAFE = "safe"
    LOW_RISK = "low-risk"
    MEDIUM_RISK = "medium-risk"
    HIGH_RISK = "high-risk"


CONTRAINDICATION_LABELS: dict[ContraindicationTag, str] = {
    ContraindicationTag.PREGNANT:                "pregnancy",
    ContraindicationTag.BREASTFEEDING:           "breastfeeding",
    ContraindicationTag.INFANTS:                 "infants",
    ContraindicationTag.CHILDREN:                "children",
    ContraindicationTag.ELDERLY:                 "older adults",
    ContraindicationTag.BLOOD_CLOTTING_DISORDER: "a blood clotting disorder",
    ContraindicationTag.BLEEDING_RISK:           "a bleeding risk",
    ContraindicationTag.SURGERY:                 "upcoming or recent surgery",
    ContraindicationTag.DIABETES:                "diabetes",
    ContraindicationTag.HYPERTENSION:            "high blood pressure",
    ContraindicationTag.HYPOTENSION:             "low blood pressure",
    ContraindicationTag.KIDNEY_DISEASE:          "kidney disease",
    ContraindicationTag.LIVER_DISEASE:           "liver disease",
    ContraindicationTag.HEART_DISEASE:           "heart disease",
    ContraindicationTag.THYROID_DISORDER:        "a thyroid disorder",
    ContraindicationTag.AUTOIMMUNE_DISEASE:      "an autoimmune disease",
    ContraindicationTag.DIGESTIVE_DISORDER:      "a digestive disorder",
    ContraindicationTag.EPILEPSY:                "epilepsy",
    ContraindicationTag.MENTAL_DISORDER:         "a mental health condition",
    ContraindicationTag.ANTICOAGULANT_USE:       "anticoagulant medication",
    ContraindicationTag.ANTIPLATELET_USE:        "antiplatelet medication",
    ContraindicationTag.ANTIDEPRESSANT_USE:      "antidepressant medication",
    ContraindicationTag.IMMUNOSUPPRESSANT_USE:   "immunosuppressant medication",
    ContraindicationTag.HORMONE_THERAPY:         "hormone therapy",
    ContraindicationTag.CHEMOTHERAPY:            "chemotherapy",
    ContraindicationTag.ALLERGY_PRONE:           "a tendency to allergies",
    ContraindicationTag.SHELLFISH_ALLERGY:       "a shellfish allergy",
    ContraindicationTag.SOY_ALLERGY:             "a soy allergy",
    ContraindicationTag.NUT_ALLERGY:             "a nut allergy",
}


DEFAULT_SEVERITY_MAP: dict[ContraindicationTag, AlertSeverity] = {
    # Critical
    ContraindicationTag.PREGNANT:                AlertSeverity.CRITICAL,
    ContraindicationTag.BREASTFEEDING:           AlertSeverity.CRITICAL,
    ContraindicationTag.INFANTS:                 AlertSeverity.CRITICAL,
    ContraindicationTag.CHILDREN:                AlertSeverity.CRITICAL,
    ContraindicationTag.SURGERY:                 AlertSeverity.CRITICAL,
    ContraindicationTag.BLOOD_CLOTTING_DISORDER: AlertSeverity.CRITICAL,
    ContraindicationTag.BLEEDING_RISK:           AlertSeverity.CRITICAL,
    ContraindicationTag.KIDNEY_DISEASE:          AlertSeverity.CRITICAL,
    ContraindicationTag.LIVER_DISEASE:           AlertSeverity.CRITICAL,
    ContraindicationTag.HEART_DISEASE:           AlertSeverity.CRITICAL,
    ContraindicationTag.CHEMOTHERAPY:            AlertSeverity.CRITICAL,
    ContraindicationTag.ANTICOAGULANT_USE:       AlertSeverity.CRITICAL,
    ContraindicationTag.ANTIPLATELET_USE:        AlertSeverity.CRITICAL,
    # Warning
    ContraindicationTag.DIABETES:                AlertSeverity.WARNING,
    ContraindicationTag.HYPERTENSION:            AlertSeverity.WARNING,
    ContraindicationTag.HYPOTENSION:             AlertSeverity.WARNING,
    ContraindicationTag.THYROID_DISORDER:        AlertSeverity.WARNING,
    ContraindicationTag.AUTOIMMUNE_DISEASE:      AlertSeverity.WARNING,
    ContraindicationTag.EPILEPSY:                AlertSeverity.WARNING,
    ContraindicationTag.MENTAL_DISORDER:         AlertSeverity.WARNING,
    ContraindicationTag.ANTIDEPRESSANT_USE:      AlertSeverity.WARNING,
    ContraindicationTag.IMMUNOSUPPRESSANT_USE:   AlertSeverity.WARNING,
    ContraindicationTag.HORMONE_THERAPY:         AlertSeverity.WARNING,
    # Info
    ContraindicationTag.ELDERLY:                 AlertSeverity.INFO,
    ContraindicationTag.DIGESTIVE_DISORDER:      AlertSeverity.INFO,
    ContraindicationTag.ALLERGY_PRONE:           AlertSeverity.INFO,
    ContraindicationTag.SHELLFISH_ALLERGY:       AlertSeverity.INFO,
    ContraindicationTag.SOY_ALLERGY:             AlertSeverity.INFO,
    ContraindicationTag.NUT_ALLERGY:             AlertSeverity.INFO,
}


def contraindication_label(tag: ContraindicationTag) -> str:
    """Return the English display label for a tag (falls back to the slug)."""
    return CONTRAINDICATION_LABELS.get(tag, str(tag))
