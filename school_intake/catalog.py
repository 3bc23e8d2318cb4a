"""
Static registry of canonical school-record fields and their known header spellings.

Base fields carry hand-written variations. Score fields are declared by a
compound display label "<domain> - <item>"; the trailing item segment and the
field identifier are added as extra variations so a header that only repeats
the item text (or the raw identifier) still matches.
"""

from __future__ import annotations

from dataclasses import dataclass

LABEL_SEPARATOR = " - "

BASE_FIELD_VARIATIONS = {
    "name": ("שם בית הספר", "בית ספר", "school name", "school", 'שם ביה"ס', "שם ביהס"),
    "principal": ("שם המנהל/ת", "מנהל/ת", "מנהל", "principal", "שם המנהל"),
    "students": ("מספר תלמידים", "מס' תלמידים", "תלמידים", "students", "סהכ תלמידים"),
    "supportLevel": ("רמת ליווי", "ליווי", "support level", "סוג ליווי"),
    "notes": ("הערות", "notes", "הערה"),
}

SCORE_DOMAINS = [
    ("vision", "חזון ברור", [
        ("clearAndAgreed", "החזון ברור ומוסכם"),
        ("educationalConceptTranslated", "התפיסה החינוכית מתורגמת לעשייה"),
        ("resourcesAndEdges", "זיהוי משאבים וקצוות"),
        ("strategicPlanning", "תכנון אסטרטגי"),
        ("measurableGoals", "יעדים מדידים"),
        ("communityPartnership", "שותפות קהילתית בחזון"),
    ]),
    ("workPlan", "תוכנית עבודה", [
        ("needsBased", "מבוססת צרכים"),
        ("clearGoalsAndMetrics", "מטרות ומדדים ברורים"),
        ("systematicMonitoring", "מעקב שיטתי"),
    ]),
    ("managementTeam", "צוות הנהלה", [
        ("teamworkBased", "עבודת צוות"),
        ("clearRoles", "הגדרת תפקידים ברורה"),
        ("middleLeadershipInvolved", "שיתוף הנהגת ביניים"),
        ("roleHoldersCoaching", "ליווי בעלי תפקידים"),
        ("dataBasedDecisions", "קבלת החלטות מבוססת נתונים"),
        ("teacherCollaboration", "שיתוף פעולה עם מורים"),
    ]),
    ("routines", "שגרות ארגוניות", [
        ("adaptedTimetable", "מערכת שעות מותאמת"),
        ("orderlyMeetingRoutines", "שגרות ישיבות סדורות"),
        ("decisionMakingProcesses", "תהליכי קבלת החלטות"),
    ]),
    ("resources", "ניהול משאבים", [
        ("systematicAllocation", "הקצאה שיטתית"),
        ("resourceUtilizationTracking", "מעקב ניצול משאבים"),
        ("controlAndImprovement", "בקרה ושיפור"),
    ]),
    ("staffCommitment", "מחויבות צוות", [
        ("teamEngagement", "מעורבות הצוות"),
        ("highSenseOfCapability", "תחושת מסוגלות גבוהה"),
        ("highExpectations", "ציפיות גבוהות"),
    ]),
    ("staffLearning", "למידה והתמקצעות", [
        ("adaptedProfessionalDevelopment", "פיתוח מקצועי מותאם"),
        ("connectingDevelopmentToPractice", "חיבור הפיתוח לפרקטיקה"),
        ("subjectAreaTraining", "הכשרה בתחומי דעת"),
        ("peerLearningCulture", "תרבות למידת עמיתים"),
        ("innovativeInitiatives", "יוזמות חדשניות"),
        ("highExpectationsOfAchievements", "ציפיות גבוהות להישגים"),
    ]),
    ("staffWellbeing", "רווחה ויציבות", [
        ("teachersReceiveSupport", "המורים מקבלים תמיכה"),
        ("structuredOnboardingProcesses", "תהליכי קליטה מובנים"),
        ("wellbeingAndResilienceSupport", "תמיכה ברווחה ובחוסן"),
        ("cohesionBuildingActivities", "פעילויות לגיבוש"),
        ("highStaffStability", "יציבות צוות גבוהה"),
        ("highSatisfaction", "שביעות רצון גבוהה"),
    ]),
    ("climateMapping", "מיפוי אקלים", [
        ("climateDataAnalysis", "ניתוח נתוני אקלים"),
        ("monitoringAndEvaluationRoutines", "שגרות מעקב והערכה"),
        ("detectionAndTreatmentMechanisms", "מנגנוני איתור וטיפול"),
    ]),
    ("climateSafety", "מוגנות ושייכות", [
        ("proceduresAndRulesEnforced", "נהלים וכללים נאכפים"),
        ("safetyReinforcementPrograms", "תוכניות לחיזוק המוגנות"),
        ("socialActivities", "פעילויות חברתיות"),
        ("fewViolenceIncidents", "מיעוט אירועי אלימות"),
        ("recognitionAndAppreciationCulture", "תרבות של הוקרה והערכה"),
    ]),
    ("climateRelationships", "יחסי קרבה", [
        ("personalSocialEmotionalDialogue", "שיח אישי רגשי חברתי"),
        ("familiarityAndPersonalConnection", "היכרות וקשר אישי"),
        ("teacherToolsAndCoaching", "כלים וליווי למורים"),
        ("optimalSocialAtmosphere", "אווירה חברתית מיטבית"),
    ]),
    ("sel", "מיומנויות רגשיות", [
        ("lifeSkillsProgram", "תוכנית כישורי חיים"),
        ("parentalConnection", "קשר עם ההורים"),
        ("diverseSupportOptions", "מגוון מענים תומכים"),
    ]),
    ("language", "שפה", [
        ("adequateReadingComprehension", "הבנת הנקרא מספקת"),
        ("developedWritingSkills", "מיומנויות כתיבה מפותחות"),
        ("broadVocabulary", "אוצר מילים רחב"),
        ("clearOralExpression", "הבעה בעל פה ברורה"),
        ("establishedReadingCulture", "תרבות קריאה מבוססת"),
        ("differentiatedResponse", "מענה דיפרנציאלי"),
    ]),
    ("math", "מתמטיקה", [
        ("basicSkillsMastery", "שליטה במיומנויות יסוד"),
        ("effectiveStrategies", "אסטרטגיות יעילות"),
        ("optimalAnxietyCoping", "התמודדות מיטבית עם חרדה"),
        ("useOfVisualAids", "שימוש בעזרים חזותיים"),
        ("sufficientDifferentiation", "דיפרנציאציה מספקת"),
        ("linkToDailyLife", "קישור לחיי היומיום"),
    ]),
    ("english", "אנגלית", [
        ("studentsConfidentInUse", "ביטחון התלמידים בשימוש בשפה"),
        ("exposureOutsideClass", "חשיפה מחוץ לכיתה"),
        ("adaptedTeachingMethods", "שיטות הוראה מותאמות"),
        ("useOfTechnologicalTools", "שימוש בכלים טכנולוגיים"),
        ("groupSizeAllowsGrowth", "גודל הקבוצה מאפשר התקדמות"),
        ("useOfAuthenticMaterials", "שימוש בחומרים אותנטיים"),
    ]),
    ("science", "מדעים", [
        ("sufficientLabEquipment", "ציוד מעבדה מספק"),
        ("developedInquirySkills", "מיומנויות חקר מפותחות"),
        ("practicalExperiences", "התנסויות מעשיות"),
        ("developedScientificThinking", "חשיבה מדעית מפותחת"),
        ("updatedCurriculum", "תוכנית לימודים עדכנית"),
        ("linkToEnvironmentAndCommunity", "קישור לסביבה ולקהילה"),
    ]),
    ("pedagogyPlanning", "תכנון הוראה", [
        ("knowledgeAndSkillsMapping", "מיפוי ידע ומיומנויות"),
        ("findingsTranslated", "תרגום ממצאים לתכנון"),
        ("effectivenessReview", "בחינת אפקטיביות"),
        ("literacyPromotionEfforts", "קידום אוריינות"),
        ("entrepreneurshipAndInnovationCulture", "תרבות יזמות וחדשנות"),
    ]),
    ("pedagogyPractices", "פרקטיקות הוראה", [
        ("lessonsIncludeVariety", "שיעורים מגוונים"),
        ("diverseLearningMethods", "דרכי למידה מגוונות"),
        ("useOfDigitalTools", "שימוש בכלים דיגיטליים"),
        ("differentiatedTeaching", "הוראה דיפרנציאלית"),
        ("teachingPromotesThinking", "הוראה מקדמת חשיבה"),
        ("teachingLearningSkills", "הוראת מיומנויות למידה"),
    ]),
    ("pedagogyFeedback", "משוב והערכה", [
        ("managedEvaluationProcesses", "תהליכי הערכה מנוהלים"),
        ("teachersHaveKnowledgeAndSkills", "ידע ומיומנויות הערכה למורים"),
        ("feedbackAndReflectionProcesses", "תהליכי משוב ורפלקציה"),
        ("evaluationCriteria", "קריטריונים להערכה"),
    ]),
    ("pedagogyFlexibility", "גמישות פדגוגית", [
        ("flexibleLearningOrganization", "ארגון למידה גמיש"),
        ("focusedCurriculum", "תוכנית לימודים ממוקדת"),
        ("teachersHaveInterdisciplinaryKnowledge", "ידע בין-תחומי למורים"),
    ]),
    ("pedagogyCollaboration", "שיתוף פעולה הוראה", [
        ("jointPlanningRoutines", "שגרות תכנון משותף"),
        ("adaptedPractices", "פרקטיקות מותאמות"),
        ("jointExamination", "בחינה משותפת של תוצרים"),
        ("openDialogueForImprovement", "שיח פתוח לשיפור"),
        ("opennessToLearning", "פתיחות ללמידה"),
        ("beliefInAbilities", "אמונה ביכולות"),
    ]),
    ("communityContinuum", "מענים לרצף", [
        ("enrichmentProgramsOffered", "תוכניות העשרה"),
        ("tripsConnectedToCurriculum", "סיורים המחוברים לתוכנית הלימודים"),
        ("diverseEducationalFrameworks", "מסגרות חינוכיות מגוונות"),
    ]),
    ("communitySocial", "חינוך חברתי", [
        ("socialEducationIsAdapted", "חינוך חברתי מותאם"),
        ("teachersHaveKnowledgeAndTools", "ידע וכלים למחנכים"),
        ("teachingAssistantsPotentialRealized", "מיצוי פוטנציאל הסייעות"),
    ]),
    ("communityLeisure", "פעילות פנאי", [
        ("collaborationsWithOrganizations", "שיתופי פעולה עם ארגונים"),
        ("encouragementAndGuidanceForParticipation", "עידוד והכוונה להשתתפות"),
        ("wideRangeOfActivities", "מגוון רחב של פעילויות"),
    ]),
    ("communityPartnerships", "קשרי קהילה", [
        ("parentParticipationInMeetings", "השתתפות הורים במפגשים"),
        ("continuousCommunicationToFamilies", "תקשורת רציפה למשפחות"),
        ("parentsInvolvedInActivities", "מעורבות הורים בפעילויות"),
        ("parentsHaveToolsToSupport", "כלים להורים לתמיכה"),
        ("effectiveDialogueWithAuthority", "שיח אפקטיבי עם הרשות"),
        ("externalResourcesUtilized", "ניצול משאבים חיצוניים"),
    ]),
]


@dataclass(frozen=True)
class FieldDefinition:
    field: str
    variations: tuple[str, ...]
    is_score: bool = False


def score_field_labels() -> dict[str, str]:
    """Map every score field identifier to its "<domain> - <item>" display label."""
    labels: dict[str, str] = {}
    for prefix, domain_label, items in SCORE_DOMAINS:
        for suffix, item_label in items:
            labels[f"{prefix}_{suffix}Score"] = f"{domain_label}{LABEL_SEPARATOR}{item_label}"
    return labels


def label_variations(label: str) -> list[str]:
    variations = [label]
    parts = label.split(LABEL_SEPARATOR)
    if len(parts) > 1:
        variations.append(parts[1])
    return variations


def _with_identifier(field: str, variations) -> tuple[str, ...]:
    if field in variations:
        return tuple(variations)
    return tuple(variations) + (field,)


def build_catalog() -> tuple[FieldDefinition, ...]:
    definitions = [
        FieldDefinition(field, _with_identifier(field, variations))
        for field, variations in BASE_FIELD_VARIATIONS.items()
    ]
    for field, label in score_field_labels().items():
        definitions.append(
            FieldDefinition(field, _with_identifier(field, label_variations(label)), is_score=True)
        )
    return tuple(definitions)


FIELD_CATALOG = build_catalog()
BASE_FIELDS = tuple(BASE_FIELD_VARIATIONS)
SCORE_FIELDS = tuple(d.field for d in FIELD_CATALOG if d.is_score)
CANONICAL_FIELDS = tuple(d.field for d in FIELD_CATALOG)
