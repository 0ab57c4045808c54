# storefront/domain/messages.py
from storefront.utils.settings import DEFAULT_LANGUAGE

SUPPORTED_LANGUAGES = ("uz", "ru", "en")

ORDER_CREATED = "order_created"
SUBMISSION_FAILED = "submission_failed"
CHECKOUT_BUSY = "checkout_busy"

_MESSAGES = {
    "missing_required_fields": {
        "uz": "Ism, familiya, telefon va manzilni kiriting",
        "ru": "Введите имя, фамилию, телефон и адрес",
        "en": "Please enter your first name, last name, phone and address",
    },
    "invalid_phone": {
        "uz": "To'liq telefon raqamini kiriting",
        "ru": "Введите полный номер телефона",
        "en": "Please enter the full phone number",
    },
    "empty_cart": {
        "uz": "Kamida bitta mahsulot qo'shing",
        "ru": "Добавьте хотя бы один товар",
        "en": "Add at least one product",
    },
    ORDER_CREATED: {
        "uz": "Buyurtma muvaffaqiyatli yuborildi! Tez orada siz bilan bog'lanamiz.",
        "ru": "Заказ успешно отправлен! Мы свяжемся с вами в ближайшее время.",
        "en": "Your order has been placed! We will contact you shortly.",
    },
    SUBMISSION_FAILED: {
        "uz": "Xatolik yuz berdi. Iltimos, qaytadan urinib ko'ring.",
        "ru": "Произошла ошибка. Пожалуйста, попробуйте еще раз.",
        "en": "Something went wrong. Please try again.",
    },
    CHECKOUT_BUSY: {
        "uz": "Yuborilmoqda...",
        "ru": "Отправка...",
        "en": "Submitting...",
    },
}


def resolve_language(language: str | None) -> str:
    if language and language.lower() in SUPPORTED_LANGUAGES:
        return language.lower()
    return DEFAULT_LANGUAGE if DEFAULT_LANGUAGE in SUPPORTED_LANGUAGES else "ru"


def translate(key: str, language: str | None = None) -> str:
    return _MESSAGES[key][resolve_language(language)]
