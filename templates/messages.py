"""Textos del bot: etiquetas del menú, solicitudes, resúmenes y errores."""

from typing import Optional

from models import ContactsRecord, ItRecord, StudentRecord

# ==================== ETIQUETAS DEL MENÚ ====================

LABEL_STUDENT = "Студент"
LABEL_IT = "IT-технології"
LABEL_CONTACTS = "Контакти"
LABEL_CHAT = "Prompt ChatGPT"
LABEL_BACK = "🔙 До меню"

MAIN_MENU_LAYOUT = [
    [LABEL_STUDENT, LABEL_IT],
    [LABEL_CONTACTS, LABEL_CHAT],
]
BACK_ONLY_LAYOUT = [[LABEL_BACK]]

MENU_LABELS = frozenset({LABEL_STUDENT, LABEL_IT, LABEL_CONTACTS, LABEL_CHAT})

# ==================== MENSAJES ====================

MENU_PROMPT = "Оберіть пункт меню:"
MENU_FALLBACK = "Будь ласка, оберіть пункт меню на клавіатурі нижче."

ASK_SURNAME = "Введіть, будь ласка, ваше прізвище:"
ASK_GROUP = "Введіть назву вашої групи:"
ASK_TECHNOLOGIES = "Вкажіть ваші IT-технології (через кому або довільний текст):"
ASK_PHONE = "Введіть номер телефону:"
ASK_EMAIL = "Введіть ваш e-mail:"

STUDENT_SAVED = "Дякую! Зберіг дані студента."
IT_SAVED = "Дякую! Зберіг ваші IT-технології."
CONTACTS_SAVED = "Дякую! Зберіг ваші контакти."

CHAT_ACTIVATED = (
    f"Режим ChatGPT активовано. Напишіть ваш запит або натисніть «{LABEL_BACK}»."
)
CHAT_NOT_CONFIGURED = (
    "Режим ChatGPT: не вказано OPENROUTER_API_KEY у .env. "
    "Додайте ключ і перезапустіть бота."
)
COMPLETION_NOT_CONFIGURED = (
    "OPENROUTER_API_KEY не налаштований. Додайте ключ у файл .env"
)
COMPLETION_TIMEOUT = "Час очікування відповіді вичерпано."
COMPLETION_FAILED = "Сталася помилка при зверненні до ChatGPT."
NO_RESPONSE = "Немає відповіді."

UNEXPECTED_ERROR = "Вибачте, сталася помилка. Спробуйте ще раз."

HELP_TEXT = "Доступні команди:\n/start - показати головне меню\n/help - ця підказка"

# ==================== PROMPTS ====================

SYSTEM_PROMPT = "Ти корисний україномовний асистент."

# ==================== FUNCIONES ====================


def greeting(first_name: Optional[str]) -> str:
    """Saludo de /start con el nombre visible del usuario."""
    return f"Привіт, {first_name or 'друже'}! Я готовий допомогти."


def format_student(student: StudentRecord) -> str:
    return (
        "Ваші дані студента:\n"
        f"- Прізвище: {student.surname}\n"
        f"- Група: {student.group}"
    )


def format_it(it: ItRecord) -> str:
    return f"Ваші IT-технології:\n{it.technologies}"


def format_contacts(contacts: ContactsRecord) -> str:
    return (
        "Ваші контакти:\n"
        f"- Телефон: {contacts.phone}\n"
        f"- E-mail: {contacts.email}"
    )


def error_reply(reason: Optional[str]) -> str:
    """Mensaje de error visible para el usuario en modo chat."""
    return f"Помилка: {reason or COMPLETION_FAILED}"
