"""
Auto-animate directives embedded as HTML comments.

Supported forms, anywhere on a source line::

    <!-- auto-animate -->
    <!-- auto-animate: true, id=hero, type=move, duration=600, easing=ease-out -->
    <!-- data-id: hero -->
"""
import logging
import re
from typing import Optional

from .models import AUTO_ANIMATE_TYPES, AutoAnimate

logger = logging.getLogger(__name__)

AUTO_ANIMATE_PATTERN = re.compile(r'<!--\s*auto-animate(?:\s*:\s*(.*?))?\s*-->', re.IGNORECASE)
DATA_ID_PATTERN = re.compile(r'<!--\s*data-id\s*:\s*(.*?)\s*-->', re.IGNORECASE)

_ENABLE_FLAGS = {'true', 'enable'}
_DISABLE_FLAGS = {'false', 'disable'}


def parse_auto_animate(raw_line: str) -> Optional[AutoAnimate]:
    """
    Extract auto-animate metadata from one raw line.

    Returns ``None`` when the line carries no directive at all, which is
    different from an ``AutoAnimate`` with every field unset (a directive
    was present but none of its tokens were valid).
    """
    directive = AUTO_ANIMATE_PATTERN.search(raw_line)
    data_id = DATA_ID_PATTERN.search(raw_line)

    if directive is None and data_id is None:
        return None

    meta = AutoAnimate()

    if directive is not None:
        params = directive.group(1)
        if params is None or not params.strip():
            # Bare <!-- auto-animate --> switches the animation on
            meta.enabled = True
        else:
            for token in params.split(','):
                _apply_token(meta, token.strip())

    if data_id is not None and data_id.group(1):
        meta.id = data_id.group(1)

    return meta


def _apply_token(meta: AutoAnimate, token: str) -> None:
    if not token:
        return

    flag = token.lower()
    if flag in _ENABLE_FLAGS:
        meta.enabled = True
        return
    if flag in _DISABLE_FLAGS:
        meta.enabled = False
        return

    if '=' not in token:
        logger.debug("Ignoring auto-animate token %r", token)
        return

    key, value = (part.strip() for part in token.split('=', 1))
    key = key.lower()

    if key == 'id':
        meta.id = value
    elif key == 'type':
        if value.lower() in AUTO_ANIMATE_TYPES:
            meta.type = value.lower()
        else:
            logger.debug("Ignoring invalid auto-animate type %r", value)
    elif key == 'duration':
        try:
            meta.duration = int(value)
        except ValueError:
            logger.debug("Ignoring non-integer auto-animate duration %r", value)
    elif key == 'easing':
        meta.easing = value
    else:
        logger.debug("Ignoring unknown auto-animate key %r", key)
