"""
Fixed selectors, markers and browser parameters for the nanomid.com UI.

The keyword lists match transient UI text and are expected to drift when the
site changes its copy; update them here.
"""

import re

from pairing.automation.selectors import ControlTargets, FieldTargets

LAUNCH_ARGS = ["--no-sandbox", "--disable-gpu"]

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124 Safari/537.36"
)

DASHBOARD_URL_PATTERN = re.compile(r"/dashboard", re.IGNORECASE)

# Login form
EMAIL_FIELD = FieldTargets(
    labels=[re.compile(r"e-?mail", re.I)],
    placeholders=[re.compile(r"e-?mail", re.I)],
    css=['input[name="email"]', 'input[type="email"]'],
)

PASSWORD_FIELD = FieldTargets(
    labels=[re.compile(r"password|contrase[nñ]a", re.I)],
    placeholders=[re.compile(r"password|contrase[nñ]a", re.I)],
    css=['input[name="password"]', 'input[type="password"]'],
)

LOGIN_BUTTON = ControlTargets(
    names=[re.compile(r"log\s*in", re.I)],
    roles=["button"],
    css=['xpath=//button[contains(text(), "Log in")]', 'button[type="submit"]'],
)

# Device pairing form
OTP_FIELD = FieldTargets(
    labels=[
        re.compile(r"otp", re.I),
        re.compile(r"quickcode", re.I),
        re.compile(r"code", re.I),
        re.compile(r"c[oó]digo", re.I),
    ],
    placeholders=[
        re.compile(r"otp", re.I),
        re.compile(r"quickcode", re.I),
        re.compile(r"c[oó]digo", re.I),
    ],
    css=['input[name*="otp" i]', 'input[placeholder*="otp" i]', '[data-testid*="otp" i]'],
)

LABEL_FIELD = FieldTargets(
    labels=[
        re.compile(r"name", re.I),
        re.compile(r"label", re.I),
        re.compile(r"nombre", re.I),
        re.compile(r"pedido", re.I),
    ],
    placeholders=[
        re.compile(r"name", re.I),
        re.compile(r"label", re.I),
        re.compile(r"nombre", re.I),
        re.compile(r"pedido", re.I),
    ],
    css=[
        'input[name*="name" i]',
        'input[name*="label" i]',
        'input[placeholder*="name" i]',
        'input[placeholder*="nombre" i]',
    ],
)

PAIR_BUTTON = ControlTargets(
    names=[
        re.compile(r"sync", re.I),
        re.compile(r"pair", re.I),
        re.compile(r"add", re.I),
        re.compile(r"link", re.I),
        re.compile(r"sincronizar", re.I),
        re.compile(r"vincular", re.I),
        re.compile(r"a[nñ]adir", re.I),
    ],
    roles=["button"],
    css=['button[type="submit"]', '[data-testid*="pair" i]', '[data-testid*="add" i]'],
)

# Confirmation markers
SUCCESS_MARKER = re.compile(r"Added|Paired|Linked|Sincronizado|Emparejado|Añadido", re.I)
ERROR_MARKER = re.compile(r"Invalid|inv[aá]lido|Error|Failed|no v[aá]lido", re.I)
