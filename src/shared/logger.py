# =============================================================================
# logger.py - Logging per le mutazioni di IntensitySegments
# =============================================================================
import logging
from datetime import datetime
import os

# =============================================================================
# CONFIGURAZIONE
# =============================================================================
SEGMENTS_LOG_CONFIG = {
    'enabled': True,                    # Master switch: False disabilita tutto
    'console_enabled': True,            # Warning su terminale
    'file_enabled': False,              # Scrive su file (off: libreria)
    'log_dir': './logs',                # Directory per i file di log
    'log_filename': None,               # None = auto-genera con timestamp
    'log_mutations': True,              # Una riga INFO per ogni add/set
}

# Ogni record porta 'operation' e 'breakpoints' (vedi _segments_context)
SEGMENTS_LOG_FORMATS = {
    'file': '%(asctime)s | %(operation)-3s | %(message)s | breakpoints=%(breakpoints)s',
    'console': 'SEGMENTS [%(operation)s, %(breakpoints)s bp]: %(message)s',
}

_segments_logger = None
_segments_logger_initialized = False


# =============================================================================
# FUNZIONI PUBBLICHE
# =============================================================================

def configure_segments_logger(
    enabled=True,
    console_enabled=True,
    file_enabled=False,
    log_dir='./logs',
    log_filename=None,
    log_mutations=True
):
    """
    Configura il logger di IntensitySegments.
    Le modifiche hanno effetto alla prossima get_segments_logger().

    Args:
        enabled: Master switch - se False, nessun logging
        console_enabled: Se True, stampa i warning su terminale
        file_enabled: Se True, scrive su file
        log_dir: Directory dove salvare i file di log
        log_filename: Nome del file; None = intensity_segments_{timestamp}.log
        log_mutations: Se True, logga ogni add/set a livello INFO
    """
    global _segments_logger, _segments_logger_initialized

    SEGMENTS_LOG_CONFIG['enabled'] = enabled
    SEGMENTS_LOG_CONFIG['console_enabled'] = console_enabled
    SEGMENTS_LOG_CONFIG['file_enabled'] = file_enabled
    SEGMENTS_LOG_CONFIG['log_dir'] = log_dir
    SEGMENTS_LOG_CONFIG['log_filename'] = log_filename
    SEGMENTS_LOG_CONFIG['log_mutations'] = log_mutations

    # Chiude gli handler del logger precedente prima della ri-inizializzazione
    if _segments_logger is not None:
        for handler in _segments_logger.handlers[:]:
            handler.close()
            _segments_logger.removeHandler(handler)

    _segments_logger = None
    _segments_logger_initialized = False


def get_segments_logger():
    """
    Ottiene il logger (lazy initialization).
    Rispetta la configurazione in SEGMENTS_LOG_CONFIG.

    Returns:
        logging.Logger o None se disabilitato
    """
    global _segments_logger, _segments_logger_initialized

    # Se già inizializzato, ritorna (anche se None)
    if _segments_logger_initialized:
        return _segments_logger

    _segments_logger_initialized = True

    if not SEGMENTS_LOG_CONFIG['enabled']:
        _segments_logger = None
        return None

    if not SEGMENTS_LOG_CONFIG['console_enabled'] and not SEGMENTS_LOG_CONFIG['file_enabled']:
        _segments_logger = None
        return None

    _segments_logger = logging.getLogger('intensity_segments')
    _segments_logger.setLevel(logging.INFO)
    _segments_logger.handlers = []

    # === FILE HANDLER ===
    if SEGMENTS_LOG_CONFIG['file_enabled']:
        _attach_handler(
            logging.FileHandler(_resolve_log_path(), mode='w', encoding='utf-8'),
            logging.INFO,
            SEGMENTS_LOG_FORMATS['file'],
        )

    # === CONSOLE HANDLER ===
    if SEGMENTS_LOG_CONFIG['console_enabled']:
        _attach_handler(
            logging.StreamHandler(),
            logging.WARNING,
            SEGMENTS_LOG_FORMATS['console'],
        )

    return _segments_logger


def get_segments_log_path():
    """
    Ritorna il percorso del file di log corrente (se esiste).

    Returns:
        str o None
    """
    if _segments_logger is None:
        return None

    for handler in _segments_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler.baseFilename
    return None


def log_mutation(operation, from_, to, amount, n_breakpoints):
    """
    Logga una mutazione completata.

    Args:
        operation: 'add' o 'set'
        from_, to: estremi del range [from_, to)
        amount: incremento (add) o valore assoluto (set)
        n_breakpoints: numero di breakpoint dopo la canonicalizzazione
    """
    if not SEGMENTS_LOG_CONFIG['log_mutations']:
        return

    logger = get_segments_logger()
    if logger is None:
        return

    logger.info(
        f"[{from_}, {to}) amount={amount}",
        extra=_segments_context(operation, n_breakpoints),
    )


def log_invalid_range(operation, from_, to, n_breakpoints):
    """
    Logga un range rifiutato (from_ >= to).

    n_breakpoints è lo stato, invariato, della struttura al momento del rifiuto.
    """
    logger = get_segments_logger()
    if logger is None:
        return

    logger.warning(
        f"range non valido [{from_}, {to})",
        extra=_segments_context(operation, n_breakpoints),
    )


# =============================================================================
# HELPERS INTERNI
# =============================================================================

def _segments_context(operation, n_breakpoints):
    """Campi extra richiesti dai formatter: operazione e numero di breakpoint."""
    return {'operation': operation, 'breakpoints': n_breakpoints}


def _resolve_log_path():
    log_dir = SEGMENTS_LOG_CONFIG['log_dir']
    os.makedirs(log_dir, exist_ok=True)

    log_filename = SEGMENTS_LOG_CONFIG.get('log_filename')
    if not log_filename:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_filename = f'intensity_segments_{timestamp}.log'

    return os.path.join(log_dir, log_filename)


def _attach_handler(handler, level, fmt):
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt='%H:%M:%S'))
    _segments_logger.addHandler(handler)
