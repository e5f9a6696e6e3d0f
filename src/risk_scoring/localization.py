"""
Localized text for flood risk factors and recommendations

Numbers are formatted the same way in every language; only the prose changes.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from .models import RiskLevel

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ("en", "pt", "es")

# Factor kinds, in the order the scorer appends them
SATURATED = "saturated"
HEAVY_RAIN_PAST = "heavy_rain_past"
HEAVY_RAIN_24H = "heavy_rain_24h"
RAIN_7D = "rain_7d"
RIVER_HIGH = "river_high"
INTENSE = "intense"
BLUE_SKY = "blue_sky"
LOW_PROBABILITY = "low_probability"
STABLE = "stable"

FACTOR_TEXT: Dict[str, Dict[str, str]] = {
    "en": {
        SATURATED: "Ground is heavily saturated ({saturation_pct:.0f}% vol).",
        HEAVY_RAIN_PAST: "High recent rainfall ({recent_mm:.1f}mm).",
        HEAVY_RAIN_24H: "Heavy precipitation forecast next 24h ({forecast_24h_mm:.1f}mm).",
        RAIN_7D: "Significant rainfall predicted over next 7 days ({forecast_7d_mm:.0f}mm).",
        RIVER_HIGH: "River levels are above historical median ({discharge:.1f} m³/s).",
        INTENSE: "Prediction includes periods of intense downpour.",
        BLUE_SKY: "Warning: River levels are high despite clear weather (upstream flow).",
        LOW_PROBABILITY: "Precipitation is predicted but probability is low.",
        STABLE: "Conditions appear stable.",
    },
    "pt": {
        SATURATED: "Solo fortemente saturado ({saturation_pct:.0f}% vol).",
        HEAVY_RAIN_PAST: "Chuva recente intensa ({recent_mm:.1f}mm).",
        HEAVY_RAIN_24H: "Previsão de chuva forte em 24h ({forecast_24h_mm:.1f}mm).",
        RAIN_7D: "Chuva significativa prevista para 7 dias ({forecast_7d_mm:.0f}mm).",
        RIVER_HIGH: "Níveis do rio acima da mediana histórica ({discharge:.1f} m³/s).",
        INTENSE: "Previsão inclui períodos de chuva torrencial.",
        BLUE_SKY: "Aviso: Nível do rio alto apesar de tempo limpo (fluxo de montante).",
        LOW_PROBABILITY: "Precipitação prevista mas com baixa probabilidade.",
        STABLE: "Condições parecem estáveis.",
    },
    "es": {
        SATURATED: "Suelo fuertemente saturado ({saturation_pct:.0f}% vol).",
        HEAVY_RAIN_PAST: "Lluvia reciente intensa ({recent_mm:.1f}mm).",
        HEAVY_RAIN_24H: "Previsión de lluvia fuerte en 24h ({forecast_24h_mm:.1f}mm).",
        RAIN_7D: "Lluvia significativa prevista para 7 días ({forecast_7d_mm:.0f}mm).",
        RIVER_HIGH: "Niveles del río por encima de la mediana histórica ({discharge:.1f} m³/s).",
        INTENSE: "La previsión incluye períodos de lluvia torrencial.",
        BLUE_SKY: "Aviso: Nivel del río alto a pesar de tiempo despejado (flujo de montaña).",
        LOW_PROBABILITY: "Precipitación prevista pero con baja probabilidad.",
        STABLE: "Las condiciones parecen estables.",
    },
}

# Decimal places of each factor value, matching the format specs above
FACTOR_PRECISION: Dict[str, int] = {
    "saturation_pct": 0,
    "recent_mm": 1,
    "forecast_24h_mm": 1,
    "forecast_7d_mm": 0,
    "discharge": 1,
}

RECOMMENDATIONS: Dict[str, Dict[RiskLevel, List[str]]] = {
    "en": {
        RiskLevel.LOW: [
            "Monitor local weather updates.",
            "Ensure gutters and drains are clear of debris.",
            "No immediate flood preparation required.",
        ],
        RiskLevel.MODERATE: [
            "Stay informed about changing weather conditions.",
            "Avoid low-lying areas if heavy rain starts.",
            "Check emergency kits and flashlights.",
            "Move valuable outdoor items to covered areas.",
        ],
        RiskLevel.HIGH: [
            "Prepare for potential water accumulation.",
            "Move vehicles to higher ground.",
            "Protect entrances with sandbags if applicable.",
            "Charge mobile devices and battery packs.",
            "Review your evacuation plan.",
        ],
        RiskLevel.CRITICAL: [
            "IMMEDIATE ACTION: Follow all local authority orders.",
            "Evacuate immediately if instructed.",
            "Do not walk or drive through flood waters.",
            "Move essential items and pets to the highest floor.",
            "Turn off gas, electricity, and water if water enters.",
        ],
    },
    "pt": {
        RiskLevel.LOW: [
            "Acompanhe as atualizações meteorológicas locais.",
            "Certifique-se que calhas e ralos estão limpos.",
            "Nenhuma preparação imediata necessária.",
        ],
        RiskLevel.MODERATE: [
            "Fique atento às mudanças nas condições do tempo.",
            "Evite áreas baixas se a chuva forte começar.",
            "Verifique kits de emergência e lanternas.",
            "Mova itens externos valiosos para áreas cobertas.",
        ],
        RiskLevel.HIGH: [
            "Prepare-se para possível acúmulo de água.",
            "Mova veículos para terrenos mais altos.",
            "Proteja entradas com sacos de areia, se aplicável.",
            "Carregue dispositivos móveis e baterias.",
            "Revise seu plano de evacuação.",
        ],
        RiskLevel.CRITICAL: [
            "AÇÃO IMEDIATA: Siga as ordens das autoridades locais.",
            "Evacue imediatamente se instruído.",
            "Não caminhe ou dirija em áreas alagadas.",
            "Mova itens essenciais e animais para o andar mais alto.",
            "Desligue gás, eletricidade e água se a água entrar.",
        ],
    },
    "es": {
        RiskLevel.LOW: [
            "Siga las actualizaciones meteorológicas locales.",
            "Asegúrese de que canaletas y desagües estén limpios.",
            "No se requiere preparación inmediata.",
        ],
        RiskLevel.MODERATE: [
            "Manténgase informado sobre los cambios en el clima.",
            "Evite áreas bajas si comienza a llover fuerte.",
            "Verifique kits de emergencia y linternas.",
            "Mueva objetos de valor exteriores a áreas cubiertas.",
        ],
        RiskLevel.HIGH: [
            "Prepárese para posible acumulación de agua.",
            "Mueva vehículos a terrenos más altos.",
            "Proteja entradas con sacos de arena si es posible.",
            "Cargue dispositivos móviles y baterías.",
            "Revise su plan de evacuación.",
        ],
        RiskLevel.CRITICAL: [
            "ACCIÓN INMEDIATA: Siga las órdenes de las autoridades.",
            "Evacue inmediatamente si se le indica.",
            "No camine ni conduzca por áreas inundadas.",
            "Mueva artículos esenciales y mascotas al piso más alto.",
            "Cierre gas, electricidad y agua si entra agua.",
        ],
    },
}

LEVEL_LABELS: Dict[str, Dict[RiskLevel, str]] = {
    "en": {
        RiskLevel.LOW: "LOW",
        RiskLevel.MODERATE: "MODERATE",
        RiskLevel.HIGH: "HIGH",
        RiskLevel.CRITICAL: "CRITICAL",
    },
    "pt": {
        RiskLevel.LOW: "BAIXO",
        RiskLevel.MODERATE: "MODERADO",
        RiskLevel.HIGH: "ALTO",
        RiskLevel.CRITICAL: "CRÍTICO",
    },
    "es": {
        RiskLevel.LOW: "BAJO",
        RiskLevel.MODERATE: "MODERADO",
        RiskLevel.HIGH: "ALTO",
        RiskLevel.CRITICAL: "CRÍTICO",
    },
}

# Rain chart labels
CHART_TEXT: Dict[str, Dict[str, str]] = {
    "en": {"now": "Now", "observed": "Observed", "forecast": "Forecast"},
    "pt": {"now": "Agora", "observed": "Observado", "forecast": "Previsão"},
    "es": {"now": "Ahora", "observed": "Observado", "forecast": "Pronóstico"},
}

# Monday first, matching datetime.weekday()
WEEKDAY_ABBREVIATIONS: Dict[str, List[str]] = {
    "en": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
    "pt": ["seg", "ter", "qua", "qui", "sex", "sáb", "dom"],
    "es": ["lun", "mar", "mié", "jue", "vie", "sáb", "dom"],
}


def normalize_language(language: str) -> str:
    """
    Map a language tag to a supported table key

    ``pt-BR`` -> ``pt``; anything unsupported falls back to English.
    """
    code = (language or "").strip().lower().replace("_", "-").split("-")[0]
    if code not in SUPPORTED_LANGUAGES:
        logger.debug(f"Unsupported language '{language}', using {DEFAULT_LANGUAGE}")
        return DEFAULT_LANGUAGE
    return code


def round_half_up(value: Optional[float], digits: int) -> Optional[float]:
    """
    Round to ``digits`` decimals with exact ties going up

    ``format`` alone rounds ties to even (100.5 -> "100"). The exact binary
    value decides what counts as a tie. None and non-finite values pass
    through unchanged.
    """
    if value is None or not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_factor(kind: str, language: str = DEFAULT_LANGUAGE, **values) -> str:
    """Render one factor sentence with its numeric values interpolated"""
    table = FACTOR_TEXT[normalize_language(language)]
    rounded = {
        name: round_half_up(value, FACTOR_PRECISION[name]) if name in FACTOR_PRECISION else value
        for name, value in values.items()
    }
    return table[kind].format(**rounded)


def get_recommendations(level: RiskLevel, language: str = DEFAULT_LANGUAGE) -> List[str]:
    """Static preparedness list for a level (a fresh copy each call)"""
    return list(RECOMMENDATIONS[normalize_language(language)][level])


def level_label(level: RiskLevel, language: str = DEFAULT_LANGUAGE) -> str:
    return LEVEL_LABELS[normalize_language(language)][level]


def chart_text(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    return CHART_TEXT[normalize_language(language)][key]


def weekday_abbreviation(weekday: int, language: str = DEFAULT_LANGUAGE) -> str:
    return WEEKDAY_ABBREVIATIONS[normalize_language(language)][weekday]
