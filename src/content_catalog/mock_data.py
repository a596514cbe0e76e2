"""Bundled mock content used when no content source is configured."""

from .schema import (
    BusinessParkReason,
    ContentSnapshot,
    EntryLink,
    GovernanceModel,
    ImplementationVariation,
    MobilitySolution,
    TrafficType,
)


MOCK_REASONS = [
    BusinessParkReason(
        id="reason-1",
        title="Verbeteren bereikbaarheid",
        description="Verbeteren van de bereikbaarheid van het bedrijfsterrein voor medewerkers, klanten en leveranciers.",
        icon="road",
        category="bereikbaarheid",
        identifier="parkeer_bereikbaarheidsproblemen",
        order=1,
    ),
    BusinessParkReason(
        id="reason-2",
        title="Duurzaamheidsdoelen",
        description="Bijdragen aan duurzaamheidsdoelen door het verminderen van CO2-uitstoot en stimuleren van duurzaam vervoer.",
        icon="leaf",
        category="duurzaamheid",
        identifier="milieuverordening",
        weight=2,
        order=2,
    ),
    BusinessParkReason(
        id="reason-3",
        title="Gezonde medewerkers",
        description="Stimuleren van actieve vormen van woon-werkverkeer.",
        icon="heart",
        category="gezondheid",
        identifier="gezondheid",
        order=3,
    ),
    BusinessParkReason(
        id="reason-4",
        title="Werkgeversaantrekkelijkheid",
        description="Verbeteren van de aantrekkelijkheid van het bedrijfsterrein als werklocatie.",
        icon="users",
        category="aantrekkelijkheid",
        identifier="personeelszorg_en_behoud",
        order=4,
    ),
    BusinessParkReason(
        id="reason-5",
        title="Overig",
        description="Andere aanleiding zonder gekoppelde score.",
        order=5,
    ),
]


MOCK_SOLUTIONS = [
    MobilitySolution(
        id="solution-1",
        title="Bedrijfsfietsenplan",
        description="Een regeling waarbij medewerkers een fiets kunnen leasen of aanschaffen via de werkgever.",
        benefits=["Gezondere medewerkers", "Minder autoritten", "Fiscaal voordeel"],
        challenges=["Investeringskosten", "Niet voor iedereen geschikt"],
        implementation_time="kort",
        costs="middel",
        category="fiets",
        icon="bike",
        type_vervoer=[TrafficType.COMMUTER],
        ophalen=["Hele reis (vanaf thuis)"],
        parkeer_bereikbaarheidsproblemen=6,
        gezondheid=9,
        personeelszorg_en_behoud=7,
        imago=8,
        milieuverordening=5,
    ),
    MobilitySolution(
        id="solution-2",
        title="Collectief OV-abonnement",
        description="Een collectief abonnement voor openbaar vervoer voor alle medewerkers op het bedrijfsterrein.",
        benefits=["Lagere kosten door collectieve inkoop", "Stimuleert OV-gebruik", "Minder autoverkeer"],
        challenges=["Afhankelijk van OV-bereikbaarheid", "Administratieve last"],
        implementation_time="middellang",
        costs="hoog",
        category="openbaar vervoer",
        icon="bus",
        type_vervoer=[TrafficType.COMMUTER, TrafficType.BUSINESS],
        parkeer_bereikbaarheidsproblemen=9,
        gezondheid=5,
        personeelszorg_en_behoud=6,
        imago=7,
        milieuverordening=8,
    ),
    MobilitySolution(
        id="solution-3",
        title="Carpooldatabase",
        description="Een platform waarop medewerkers ritten kunnen aanbieden en vinden voor carpoolen.",
        benefits=["Eenvoudig te implementeren", "Lagere kosten voor medewerkers", "Minder auto's"],
        challenges=["Vereist actieve deelname", "Privacy aspecten"],
        implementation_time="kort",
        costs="laag",
        category="auto",
        icon="car",
        type_vervoer=[TrafficType.COMMUTER, TrafficType.BUSINESS, TrafficType.VISITOR],
        ophalen=["Vanaf thuis"],
        parkeer_bereikbaarheidsproblemen=8,
        gezondheid=4,
        personeelszorg_en_behoud=7,
        imago=6,
        milieuverordening=7,
    ),
    MobilitySolution(
        id="solution-4",
        title="Pendeldienst",
        description="Een shuttle die medewerkers op vaste tijden van en naar het station brengt.",
        benefits=["Verbeterde bereikbaarheid", "Minder autogebruik", "Betere verbinding met OV"],
        challenges=["Kosten voor organisatie en beheer", "Vereist voldoende volume"],
        implementation_time="middellang",
        costs="hoog",
        category="openbaar vervoer",
        icon="shuttle-van",
        type_vervoer=[TrafficType.COMMUTER],
        ophalen=["Tussen OV-knooppunt of P+R terrein en bedrijventerrein (locatie)"],
        parkeer_bereikbaarheidsproblemen=9,
        gezondheid=5,
        personeelszorg_en_behoud=8,
        imago=7,
        milieuverordening=7,
        governance_models=[EntryLink.to("governance-2"), EntryLink.to("governance-3")],
    ),
]


MOCK_GOVERNANCE_MODELS = [
    GovernanceModel(
        id="governance-1",
        title="Geen rechtsvorm",
        description="Bedrijven werken samen op basis van afspraken, zonder aparte rechtspersoon.",
        advantages=["Snel te starten", "Geen oprichtingskosten"],
        disadvantages=["Geen rechtspersoon om contracten af te sluiten", "Vrijblijvend"],
    ),
    GovernanceModel(
        id="governance-2",
        title="Vereniging",
        description="Een vereniging van bedrijven die samen mobiliteitsoplossingen beheren en financieren.",
        advantages=["Democratische structuur", "Gedeelde kosten", "Sterke betrokkenheid"],
        disadvantages=["Langere besluitvorming", "Vrijwillige basis"],
        legal_form="Vereniging",
        stakeholders=["Bedrijven", "Gemeente", "Vervoerders"],
    ),
    GovernanceModel(
        id="governance-3",
        title="Stichting",
        description="Een stichting met een onafhankelijk bestuur die de dienst organiseert.",
        advantages=["Professioneel bestuur", "Geschikt voor subsidies"],
        disadvantages=["Minder directe invloed van bedrijven"],
        legal_form="Stichting",
    ),
    GovernanceModel(
        id="governance-4",
        title="Ondernemers BIZ",
        description="Een bedrijveninvesteringszone waarin alle ondernemers verplicht bijdragen.",
        advantages=["Geen free riders", "Stabiele financiering"],
        disadvantages=["Draagvlakmeting vereist", "Looptijd maximaal vijf jaar"],
    ),
    GovernanceModel(
        id="governance-5",
        title="Coöperatie U.A.",
        description="Een coöperatie met uitgesloten aansprakelijkheid voor de leden.",
        advantages=["Leden zijn niet aansprakelijk", "Winst kan worden uitgekeerd"],
        disadvantages=["Zwaardere oprichting"],
    ),
]


MOCK_VARIATIONS = [
    ImplementationVariation(
        id="variation-1",
        title="Pendeldienst - Zelf inkopen door vereniging",
        mobiliteitsdienst_variant_id="solution-4",
        samenvatting="De bedrijven kopen de pendeldienst gezamenlijk in bij een vervoerder.",
        governance_models=[EntryLink.to("governance-2"), EntryLink.to("governance-3")],
        governance_models_mits=[EntryLink.to("governance-4")],
        governance_models_nietgeschikt=[EntryLink.to("governance-1")],
        vereniging="Geschikt: de vereniging sluit het contract met de vervoerder.",
        stichting="Geschikt wanneer het bestuur onafhankelijk moet zijn.",
        ondernemersBiz="Alleen wanneer de BIZ-heffing de exploitatie dekt.",
        geenRechtsvorm="Niet geschikt: er is een contractpartij nodig.",
    ),
    ImplementationVariation(
        id="variation-2",
        title="Pendeldienst - Aansluiten bij bestaande dienst",
        mobiliteitsdienst_variant_id="solution-4",
        governance_models=[EntryLink.to("governance-1"), EntryLink.to("governance-2")],
        governance_models_mits=[EntryLink.to("governance-2")],
    ),
    ImplementationVariation(
        id="variation-3",
        title="Carpooldatabase - Platform via werkgevers",
        mobiliteitsdienst_variant_id="solution-3",
        governance_models=[EntryLink.to("governance-1"), EntryLink.to("governance-5")],
        governance_models_nietgeschikt=[EntryLink.to("governance-5")],
        cooperatieUa="Te zwaar voor een eenvoudig platform.",
    ),
]


def mock_snapshot() -> ContentSnapshot:
    """Return a fresh snapshot of the bundled mock content."""
    return ContentSnapshot(
        version="mock",
        source="mock",
        reasons=[r.model_copy(deep=True) for r in MOCK_REASONS],
        solutions=[s.model_copy(deep=True) for s in MOCK_SOLUTIONS],
        governance_models=[m.model_copy(deep=True) for m in MOCK_GOVERNANCE_MODELS],
        implementation_variations=[v.model_copy(deep=True) for v in MOCK_VARIATIONS],
    )
