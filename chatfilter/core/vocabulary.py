"""
Vocabulary and pattern tables for the contact-leak filter.

Every table here is plain data, compiled once at import time. Words and
patterns are written in normalized form (lower case, no accents) because
they are always matched against the output of ``normalize()``.
"""

import re
from typing import List, NamedTuple, Pattern, Tuple


class WeightedTerm(NamedTuple):
    """A vocabulary word and the score it contributes when present."""
    word: str
    weight: int
    category: str


class KeywordCombo(NamedTuple):
    """Two keywords that are suspicious when both appear in a message."""
    first: str
    second: str

    def matches(self, normalized: str) -> bool:
        return self.first in normalized and self.second in normalized


def _terms(weight: int, category: str, words: str) -> Tuple[WeightedTerm, ...]:
    return tuple(WeightedTerm(word, weight, category) for word in words.split())


def _compile(patterns: List[str]) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(pattern) for pattern in patterns)


# ============================================================
# CONTACT VOCABULARY
# ============================================================

CONTACT_TERMS: Tuple[WeightedTerm, ...] = (
    # Direct contact
    _terms(8, 'direct_contact', 'telefono celular whatsapp contacto llamar numero')
    + _terms(2, 'direct_contact', 'movil contactar contactame llama llamame whats wsp '
                                  'telegram sms mensaje mensajea mensajear')
    # Meetings and location
    + _terms(5, 'location', 'direccion encuentro calle casa vernos coordinar')
    + _terms(2, 'location', 'ubicacion sector avenida av domicilio residencia barrio '
                            'ciudadela conjunto encuentre reunir reunamos reunirse verse '
                            'quedar quedamos cita coordine coordinemos')
    # External payment methods
    + _terms(2, 'external_payment', 'transferencia deposito banco cuenta efectivo paypal '
                                    'western moneygram giro')
    # External communication
    + _terms(5, 'external_channel', 'gmail facebook instagram email zoom skype')
    + _terms(2, 'external_channel', 'correo yahoo hotmail linkedin twitter tiktok teams meet')
    # Platform evasion
    + _terms(8, 'evasion', 'aparte fuera externo directo privado')
    + _terms(2, 'evasion', 'afuera externamente directamente privada particular personal '
                           'independiente')
)

# ============================================================
# BUSINESS VOCABULARY
# ============================================================

BUSINESS_TERMS: Tuple[WeightedTerm, ...] = (
    # Strong transactional words
    _terms(6, 'transaction', 'precio cuesta vale vendo comprar productos stock')
    # Specifications
    + _terms(4, 'specification', 'tamano peso medida capacidad memoria voltios')
    # Time and delivery
    + _terms(4, 'delivery', 'dias horas demora entrega inmediato rapido')
    # Quantities
    + _terms(4, 'quantity', 'tengo cantidad unidades piezas disponible')
    # Everything else that reads as ordinary commerce
    + _terms(2, 'quantity', 'tiene hay articulos items ejemplares copias vendiendo ofrezco '
                            'incluye contiene trae viene pack')
    + _terms(2, 'price', 'valor coste costo pagar pago dolares usd centavos euros soles '
                         'pesos descuento oferta promocion rebaja barato caro economic '
                         'economico ganga oportunidad')
    + _terms(2, 'delivery', 'minutos semanas meses demoro tarda tarde envio tiempo '
                            'plazo fecha cuando listo pronto manana hoy ayer')
    + _terms(2, 'specification', 'talla largo ancho alto gramos kilos metros centimetros '
                                 'pulgadas litros mililitros watts rpm velocidad gb mb '
                                 'inches cm mm kg gr')
    + _terms(2, 'statistics', 'porciento porcentaje % de sobre total promedio maximo minimo '
                              'aproximadamente cerca alrededor entre desde hasta')
    + (WeightedTerm('por ciento', 2, 'statistics'),)
    + _terms(2, 'service', 'garantia servicio reparacion nuevo usado mantenimiento revision '
                           'cambio repuesto original')
    + _terms(2, 'condition', 'estado condicion perfecto excelente bueno regular funciona '
                             'funcionando trabajando operativo')
    + _terms(2, 'purchase', 'compra venta vender interesado interesada necesito busco quiero '
                            'deseo acepto negociable')
)

# ============================================================
# SPELLED-OUT NUMBERS
# ============================================================

WRITTEN_NUMBERS: Tuple[str, ...] = (
    'cero', 'uno', 'dos', 'tres', 'cuatro', 'cinco', 'seis', 'siete', 'ocho', 'nueve',
    'diez', 'once', 'doce', 'trece', 'catorce', 'quince', 'dieciseis', 'diecisiete',
    'dieciocho', 'diecinueve', 'veinte', 'treinta', 'cuarenta', 'cincuenta',
    'sesenta', 'setenta', 'ochenta', 'noventa', 'cien', 'mil',
)

WRITTEN_NUMBER_PATTERN: Pattern[str] = re.compile(
    r'\b(' + '|'.join(WRITTEN_NUMBERS) + r')\b'
)

# ============================================================
# NUMERIC EMOJIS
# ============================================================

NUMBER_EMOJI_PATTERNS: Tuple[Pattern[str], ...] = _compile([
    r'[0-9]\ufe0f?\u20e3',  # keycap digits (digit, optional VS16, enclosing keycap)
    r'\U0001F51F',          # keycap ten
])

# ============================================================
# CONTACT REQUEST PHRASES
# ============================================================

CONTACT_REQUEST_PATTERNS: Tuple[Pattern[str], ...] = _compile([
    # Asking for a social network or mail address
    r'(?:mandame|pasame|dame|enviame|comparteme)\s+(?:tu\s+)?(?:facebook|whatsapp|whats|instagram|telegram|email|correo|gmail)',
    r'(?:mi\s+)?(?:facebook|whatsapp|whats|instagram|telegram)\s+es\s',
    r'(?:agregame|anademe|busqueme|contactame)\s+(?:en\s+)?(?:facebook|whatsapp|whats|instagram|telegram)',
    # Meetings and locations
    r'(?:me\s+encuentro|estoy|vivo|trabajo)\s+en\s+(?:la\s+)?(?:av|avenida|calle|sector|barrio)',
    r'(?:nos\s+vemos|encontramos|encontremonos|quedar|vernos)\s+en\s+',
    r'(?:mi\s+)?(?:direccion|ubicacion)\s+es\s+',
    r'(?:vivo|resido|trabajo)\s+(?:en\s+)?(?:el\s+)?(?:sector|barrio|zona)\s+',
    # Leaving the platform
    r'(?:conversemos|hablemos|escribeme|contactame)\s+(?:por\s+)?(?:fuera|aparte|afuera|externo)',
    r'(?:comunicate|escribeme|contactame)\s+(?:por\s+)?(?:privado|directo)',
    r'(?:salir|comunicarnos|hablar)\s+(?:de\s+)?(?:aqui|la\s+plataforma)',
    # Handing over contact data
    r'(?:te\s+paso|aqui\s+mi|este\s+es\s+mi)\s+(?:facebook|whatsapp|email|correo)',
])

SUSPICIOUS_COMBOS: Tuple[KeywordCombo, ...] = (
    KeywordCombo('mandame', 'facebook'), KeywordCombo('mandame', 'whatsapp'),
    KeywordCombo('mandame', 'instagram'), KeywordCombo('pasame', 'facebook'),
    KeywordCombo('pasame', 'whatsapp'), KeywordCombo('pasame', 'correo'),
    KeywordCombo('conversemos', 'whatsapp'), KeywordCombo('conversemos', 'facebook'),
    KeywordCombo('conversemos', 'telegram'), KeywordCombo('escribeme', 'privado'),
    KeywordCombo('contactame', 'directo'), KeywordCombo('hablemos', 'fuera'),
    KeywordCombo('encuentro', 'avenida'), KeywordCombo('encuentro', 'sector'),
    KeywordCombo('ubicacion', 'direccion'), KeywordCombo('vemos', 'calle'),
    KeywordCombo('quedar', 'sector'),
)

# ============================================================
# PHONE NUMBERS (Ecuador)
# ============================================================

# Formats with no legitimate business reading
DEFINITE_PHONE_PATTERNS: Tuple[Pattern[str], ...] = _compile([
    r'(?<!\w)(\+593[\s.-]?[96-9]\d[\s.-]?\d{3}[\s.-]?\d{4})(?!\w)',  # +593 9X XXX XXXX
    r'(?<!\w)(0[96-9]\d[\s.-]?\d{3}[\s.-]?\d{4})(?!\w)',             # 09X XXX XXXX
    r'(?<!\w)(0[2-7]\d{7})(?!\w)',                                   # 0[2-7]XXXXXXX landline
])

INTERNATIONAL_PHONE_PATTERN: Pattern[str] = re.compile(
    r'(?<!\w)(\+\d{1,3}[\s.-]?[96-9]\d{2}[\s.-]?\d{3}[\s.-]?\d{3,4})(?!\w)'
)
LONG_DIGIT_RUN_PATTERN: Pattern[str] = re.compile(r'\b\d{8,12}\b')
# Censoring redacts runs of any length past eight digits
LONG_DIGIT_RUN_CENSOR_PATTERN: Pattern[str] = re.compile(r'\b\d{8,}\b')
GROUPED_DIGITS_PATTERN: Pattern[str] = re.compile(r'\b\d{2,4}[\s.-]\d{3,4}[\s.-]\d{3,4}\b')

# ============================================================
# CONTEXT INDICATORS
# ============================================================

PREFIXED_NUMBER_PATTERN: Pattern[str] = re.compile(r'(?:\+|00)\d{8,}')

EVASION_PHRASES: Tuple[str, ...] = (
    'te paso mi', 'aqui mi', 'este es mi', 'mi numero es',
    'comunicate', 'escribeme', 'busqueme', 'contactame',
)

STRONG_BUSINESS_PATTERNS: Tuple[Pattern[str], ...] = _compile([
    r'tiene(?:s)?\s+\d+\s+(?:productos|articulos|unidades|piezas)',
    r'cuesta\s+\d+\s*(?:dolares|usd|pesos)',
    r'precio\s+(?:es\s+)?\d+',
    r'(?:demora|tarda)\s+\d+\s+(?:dias|horas|semanas)',
    r'(?:pesa|mide)\s+\d+\s*(?:kg|gr|cm|metros)',
    r'oferta\s+\d+(?:%|\s+por\s+ciento)',
    r'memoria\s+\d+\s*(?:gb|mb)',
    r'capacidad\s+\d+\s*(?:litros|ml)',
])

BUSINESS_COMBOS: Tuple[KeywordCombo, ...] = (
    KeywordCombo('vendo', 'productos'), KeywordCombo('precio', 'negociable'),
    KeywordCombo('stock', 'disponible'), KeywordCombo('entrega', 'inmediata'),
    KeywordCombo('oferta', 'especial'), KeywordCombo('descuento', 'por'),
)

STRONG_CONTACT_PATTERNS: Tuple[Pattern[str], ...] = _compile([
    r'(?:mi\s+)?(?:numero|telefono|celular)\s+(?:es\s+)?\d+',
    r'llamame\s+al\s+\d+',
    r'escribeme\s+al\s+\d+',
    r'contactame\s+(?:al\s+)?\d+',
    r'whatsapp\s+\d+',
    r'(?:mi\s+)?direccion\s+es',
    r'nos\s+vemos\s+en',
    r'te\s+paso\s+mi\s+(?:numero|telefono)',
])

# ============================================================
# CENSORSHIP
# ============================================================

EMOJI_WARNING_GLYPH = '\u26a0\ufe0f'
REDACTION_TOKEN = '[NÚMERO CENSURADO]'
