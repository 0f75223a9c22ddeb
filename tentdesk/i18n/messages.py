"""
TentDesk i18n - Message Catalog
===============================
Closed set of message identifiers with one string per supported locale.

A lookup miss is an error (UnknownMessageKey), never the key echoed back.
Receipts always use both catalogs side by side, whatever locale the
operator has selected.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping

from tentdesk.errors import UnknownMessageKey


class Locale(Enum):
    EN = "en"
    AR = "ar"

    @property
    def is_rtl(self) -> bool:
        return self is Locale.AR

    @classmethod
    def parse(cls, value: "str | Locale | None") -> "Locale":
        if isinstance(value, Locale):
            return value
        if value is None or not str(value).strip():
            return cls.EN
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unsupported locale '{value}'.") from exc


def text_direction(locale: Locale) -> str:
    return "rtl" if locale.is_rtl else "ltr"


class MessageId(Enum):
    # ── Auth ──────────────────────────────────────────────────
    AUTH_TITLE = "auth.title"
    AUTH_SUBTITLE = "auth.subtitle"
    AUTH_PHONE_LABEL = "auth.phoneLabel"
    AUTH_SEND_OTP = "auth.sendOtp"
    AUTH_OTP_LABEL = "auth.otpLabel"
    AUTH_VERIFY = "auth.verify"
    AUTH_OTP_SENT = "auth.otpSent"
    AUTH_OTP_EXPIRED = "auth.otpExpired"
    AUTH_INVALID_OTP = "auth.invalidOtp"
    AUTH_OTP_NOT_REQUESTED = "auth.otpNotRequested"

    # ── Dashboard ─────────────────────────────────────────────
    DASHBOARD_TITLE = "dashboard.title"
    DASHBOARD_VIEW_LAYOUT = "dashboard.viewLayout"
    DASHBOARD_RECEIPT_FORM = "dashboard.receiptForm"
    DASHBOARD_LOGOUT = "dashboard.logout"

    # ── Tent layout ───────────────────────────────────────────
    LAYOUT_TITLE = "layout.title"
    LAYOUT_AVAILABLE = "layout.available"
    LAYOUT_BOOKED = "layout.booked"
    LAYOUT_RESERVED = "layout.reserved"
    LAYOUT_TENT_DETAILS = "layout.tentDetails"
    LAYOUT_CLIENT_NAME = "layout.clientName"
    LAYOUT_PHONE = "layout.phone"
    LAYOUT_STATUS = "layout.status"

    # ── Booking form ──────────────────────────────────────────
    FORM_TITLE = "form.title"
    FORM_TENT_NUMBER = "form.tentNumber"
    FORM_CLIENT_NAME = "form.clientName"
    FORM_PHONE = "form.phone"
    FORM_BOOKING_DATE = "form.bookingDate"
    FORM_PRICE = "form.price"
    FORM_USAGE = "form.usage"
    FORM_ADDITIONAL_SERVICES = "form.additionalServices"
    FORM_ELECTRICITY = "form.electricity"
    FORM_CHAIRS = "form.chairs"
    FORM_TABLE = "form.table"
    FORM_ADVERTISING_ZONES = "form.advertisingZones"
    FORM_CAR_FLAGS = "form.carFlags"
    FORM_BANNER_FLAGS = "form.bannerFlags"
    FORM_NOTES = "form.notes"
    FORM_GENERATE_RECEIPT = "form.generateReceipt"
    FORM_TENT_ALREADY_BOOKED = "form.tentAlreadyBooked"
    FORM_RECEIPT_GENERATED = "form.receiptGenerated"
    FORM_RECEIPT_FAILED = "form.receiptFailed"

    # ── Receipt document ──────────────────────────────────────
    RECEIPT_TITLE = "receipt.title"
    RECEIPT_SEASON = "receipt.season"
    RECEIPT_DATE = "receipt.date"
    RECEIPT_RECEIVED_FROM = "receipt.receivedFrom"
    RECEIPT_AMOUNT = "receipt.amount"
    RECEIPT_FOR_SUBSCRIPTION = "receipt.forSubscription"
    RECEIPT_TENT_NO = "receipt.tentNo"
    RECEIPT_USAGE_PURPOSE = "receipt.usagePurpose"
    RECEIPT_ADDITIONAL_SERVICES = "receipt.additionalServices"
    RECEIPT_ELECTRICITY = "receipt.electricity"
    RECEIPT_CHAIRS = "receipt.chairs"
    RECEIPT_TABLE = "receipt.table"
    RECEIPT_ADVERTISEMENTS = "receipt.advertisements"
    RECEIPT_ZONE = "receipt.zone"
    RECEIPT_TOTAL_QTY = "receipt.totalQty"
    RECEIPT_NONE = "receipt.none"
    RECEIPT_CAR_FLAGS = "receipt.carFlags"
    RECEIPT_BANNER_FLAGS = "receipt.bannerFlags"
    RECEIPT_NOTES = "receipt.notes"
    RECEIPT_NOT_TAX_INVOICE = "receipt.notTaxInvoice"
    RECEIPT_RECEIVERS_SIGNATURE = "receipt.receiversSignature"
    RECEIPT_SIGNATURE = "receipt.signature"


_EN: Dict[MessageId, str] = {
    MessageId.AUTH_TITLE: "Tripoli Karting Race 2025",
    MessageId.AUTH_SUBTITLE: "Tent Reservation System",
    MessageId.AUTH_PHONE_LABEL: "Phone Number",
    MessageId.AUTH_SEND_OTP: "Send OTP",
    MessageId.AUTH_OTP_LABEL: "Enter OTP Code",
    MessageId.AUTH_VERIFY: "Verify & Login",
    MessageId.AUTH_OTP_SENT: "OTP sent to your phone",
    MessageId.AUTH_OTP_EXPIRED: "OTP expired, please request a new one",
    MessageId.AUTH_INVALID_OTP: "Invalid OTP code",
    MessageId.AUTH_OTP_NOT_REQUESTED: "Please request an OTP first",
    MessageId.DASHBOARD_TITLE: "Tent Management Dashboard",
    MessageId.DASHBOARD_VIEW_LAYOUT: "View Tent Layout",
    MessageId.DASHBOARD_RECEIPT_FORM: "Receipt Generator",
    MessageId.DASHBOARD_LOGOUT: "Logout",
    MessageId.LAYOUT_TITLE: "Tent Layout - Tripoli Karting Race 2025",
    MessageId.LAYOUT_AVAILABLE: "Available",
    MessageId.LAYOUT_BOOKED: "Booked",
    MessageId.LAYOUT_RESERVED: "Reserved",
    MessageId.LAYOUT_TENT_DETAILS: "Tent Details",
    MessageId.LAYOUT_CLIENT_NAME: "Client Name",
    MessageId.LAYOUT_PHONE: "Phone Number",
    MessageId.LAYOUT_STATUS: "Status",
    MessageId.FORM_TITLE: "Generate Receipt",
    MessageId.FORM_TENT_NUMBER: "Tent Number",
    MessageId.FORM_CLIENT_NAME: "Client Full Name",
    MessageId.FORM_PHONE: "Phone Number",
    MessageId.FORM_BOOKING_DATE: "Booking Date",
    MessageId.FORM_PRICE: "Price",
    MessageId.FORM_USAGE: "Usage Purpose",
    MessageId.FORM_ADDITIONAL_SERVICES: "Additional Services",
    MessageId.FORM_ELECTRICITY: "Electricity",
    MessageId.FORM_CHAIRS: "Chairs",
    MessageId.FORM_TABLE: "Table",
    MessageId.FORM_ADVERTISING_ZONES: "Advertising Zone Selection",
    MessageId.FORM_CAR_FLAGS: "Car Flags",
    MessageId.FORM_BANNER_FLAGS: "Banner Flags",
    MessageId.FORM_NOTES: "Notes",
    MessageId.FORM_GENERATE_RECEIPT: "Generate Receipt",
    MessageId.FORM_TENT_ALREADY_BOOKED: "This tent is already booked",
    MessageId.FORM_RECEIPT_GENERATED: "Receipt generated successfully",
    MessageId.FORM_RECEIPT_FAILED: "Failed to generate receipt",
    MessageId.RECEIPT_TITLE: "RECEIPT",
    MessageId.RECEIPT_SEASON: "SEASON 1",
    MessageId.RECEIPT_DATE: "DATE",
    MessageId.RECEIPT_RECEIVED_FROM: "RECEIVED FROM",
    MessageId.RECEIPT_AMOUNT: "AMOUNT",
    MessageId.RECEIPT_FOR_SUBSCRIPTION: "FOR SUBSCRIPTION IN TRIPOLI KARTING RACE",
    MessageId.RECEIPT_TENT_NO: "TENT NO.",
    MessageId.RECEIPT_USAGE_PURPOSE: "USAGE PURPOSE",
    MessageId.RECEIPT_ADDITIONAL_SERVICES: "ADDITIONAL SERVICES",
    MessageId.RECEIPT_ELECTRICITY: "ELECTRICITY",
    MessageId.RECEIPT_CHAIRS: "CHAIRS",
    MessageId.RECEIPT_TABLE: "TABLE",
    MessageId.RECEIPT_ADVERTISEMENTS: "ADVERTISEMENTS ON TRACK",
    MessageId.RECEIPT_ZONE: "ZONE",
    MessageId.RECEIPT_TOTAL_QTY: "TOTAL QTY",
    MessageId.RECEIPT_NONE: "None",
    MessageId.RECEIPT_CAR_FLAGS: "CAR FLAGS",
    MessageId.RECEIPT_BANNER_FLAGS: "BANNER FLAGS",
    MessageId.RECEIPT_NOTES: "NOTES",
    MessageId.RECEIPT_NOT_TAX_INVOICE: "THIS RECEIPT IS NOT A TAX INVOICE",
    MessageId.RECEIPT_RECEIVERS_SIGNATURE: "RECEIVER'S SIGNATURE",
    MessageId.RECEIPT_SIGNATURE: "SIGNATURE",
}

_AR: Dict[MessageId, str] = {
    MessageId.AUTH_TITLE: "مهرجان طرابلس للكارتينج ٢٠٢٥",
    MessageId.AUTH_SUBTITLE: "نظام حجز الخيام",
    MessageId.AUTH_PHONE_LABEL: "رقم الهاتف",
    MessageId.AUTH_SEND_OTP: "إرسال الرمز",
    MessageId.AUTH_OTP_LABEL: "أدخل رمز التحقق",
    MessageId.AUTH_VERIFY: "تحقق و دخول",
    MessageId.AUTH_OTP_SENT: "تم إرسال الرمز إلى هاتفك",
    MessageId.AUTH_OTP_EXPIRED: "انتهت صلاحية الرمز، يرجى طلب رمز جديد",
    MessageId.AUTH_INVALID_OTP: "رمز التحقق غير صحيح",
    MessageId.AUTH_OTP_NOT_REQUESTED: "يرجى طلب رمز التحقق أولاً",
    MessageId.DASHBOARD_TITLE: "لوحة تحكم الخيام",
    MessageId.DASHBOARD_VIEW_LAYOUT: "عرض الخيام",
    MessageId.DASHBOARD_RECEIPT_FORM: "إنشاء وصل",
    MessageId.DASHBOARD_LOGOUT: "تسجيل خروج",
    MessageId.LAYOUT_TITLE: "مخطط الخيام - مهرجان طرابلس للكارتينج ٢٠٢٥",
    MessageId.LAYOUT_AVAILABLE: "متاحة",
    MessageId.LAYOUT_BOOKED: "محجوزة",
    MessageId.LAYOUT_RESERVED: "مُحتَجزة",
    MessageId.LAYOUT_TENT_DETAILS: "تفاصيل الخيمة",
    MessageId.LAYOUT_CLIENT_NAME: "اسم العميل",
    MessageId.LAYOUT_PHONE: "رقم الهاتف",
    MessageId.LAYOUT_STATUS: "الحالة",
    MessageId.FORM_TITLE: "إنشاء وصل استلام",
    MessageId.FORM_TENT_NUMBER: "رقم الخيمة",
    MessageId.FORM_CLIENT_NAME: "الاسم الكامل",
    MessageId.FORM_PHONE: "رقم الهاتف",
    MessageId.FORM_BOOKING_DATE: "تاريخ الحجز",
    MessageId.FORM_PRICE: "المبلغ",
    MessageId.FORM_USAGE: "جهة الاستعمال",
    MessageId.FORM_ADDITIONAL_SERVICES: "خدمات إضافية",
    MessageId.FORM_ELECTRICITY: "كهرباء",
    MessageId.FORM_CHAIRS: "كراسي",
    MessageId.FORM_TABLE: "طاولة",
    MessageId.FORM_ADVERTISING_ZONES: "اختيار منطقة الإعلان",
    MessageId.FORM_CAR_FLAGS: "أعلام على السيارات",
    MessageId.FORM_BANNER_FLAGS: "أعلام على الأرصفة",
    MessageId.FORM_NOTES: "ملاحظات",
    MessageId.FORM_GENERATE_RECEIPT: "إنشاء الوصل",
    MessageId.FORM_TENT_ALREADY_BOOKED: "هذه الخيمة محجوزة بالفعل",
    MessageId.FORM_RECEIPT_GENERATED: "تم إنشاء الوصل بنجاح",
    MessageId.FORM_RECEIPT_FAILED: "تعذر إنشاء الوصل",
    MessageId.RECEIPT_TITLE: "وصل استلام مبلغ",
    MessageId.RECEIPT_SEASON: "الموسم الأول",
    MessageId.RECEIPT_DATE: "تاريخ الاستلام",
    MessageId.RECEIPT_RECEIVED_FROM: "وصلنا من السادة",
    MessageId.RECEIPT_AMOUNT: "مبلغ وقدره",
    MessageId.RECEIPT_FOR_SUBSCRIPTION: "وذلك بدل اشتراك في مهرجان طرابلس للكارتينج",
    MessageId.RECEIPT_TENT_NO: "الخيمة رقم",
    MessageId.RECEIPT_USAGE_PURPOSE: "جهة الاستعمال",
    MessageId.RECEIPT_ADDITIONAL_SERVICES: "خدمات أخرى",
    MessageId.RECEIPT_ELECTRICITY: "توفير كهرباء",
    MessageId.RECEIPT_CHAIRS: "توفير كراسي",
    MessageId.RECEIPT_TABLE: "توفير طاولات",
    MessageId.RECEIPT_ADVERTISEMENTS: "إعلانات على مسار الحلبة",
    MessageId.RECEIPT_ZONE: "منطقة",
    MessageId.RECEIPT_TOTAL_QTY: "العدد الإجمالي",
    MessageId.RECEIPT_NONE: "لا يوجد",
    MessageId.RECEIPT_CAR_FLAGS: "أعلام على السيارات",
    MessageId.RECEIPT_BANNER_FLAGS: "أعلام على الأرصفة",
    MessageId.RECEIPT_NOTES: "ملاحظات",
    MessageId.RECEIPT_NOT_TAX_INVOICE: "هذا الوصل لا يعتبر فاتورة ضريبية",
    MessageId.RECEIPT_RECEIVERS_SIGNATURE: "المستلم",
    MessageId.RECEIPT_SIGNATURE: "الإمضاء",
}

_CATALOGS: Dict[Locale, Mapping[MessageId, str]] = {
    Locale.EN: _EN,
    Locale.AR: _AR,
}

_BY_KEY: Dict[str, MessageId] = {message_id.value: message_id for message_id in MessageId}


def translate(message_id: MessageId, locale: Locale) -> str:
    text = _CATALOGS[locale].get(message_id)
    if text is None:
        raise UnknownMessageKey(message_id.value, locale.value)
    return text


def lookup(key: str, locale: Locale) -> str:
    """Translate a dotted string key (as used by the UI layer)."""
    message_id = _BY_KEY.get(key)
    if message_id is None:
        raise UnknownMessageKey(key, locale.value)
    return translate(message_id, locale)


def catalog(locale: Locale) -> Dict[str, str]:
    """Whole catalog for one locale, keyed by dotted string key."""
    return {
        message_id.value: translate(message_id, locale)
        for message_id in MessageId
    }


def missing_messages(locale: Locale) -> tuple[MessageId, ...]:
    return tuple(
        message_id for message_id in MessageId
        if message_id not in _CATALOGS[locale]
    )
