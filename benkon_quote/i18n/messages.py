"""Locale resource bundle for user-facing strings (Vietnamese and English)"""

from typing import Dict, List, Optional

from benkon_quote.config import settings

SUPPORTED_LOCALES = ("vi", "en")
FALLBACK_LOCALE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "vi": {
        # Validation
        "validation.required": "Trường này là bắt buộc",
        "validation.min_value": "Giá trị phải lớn hơn 0",
        # Options
        "option.purchase": "Mua trả thẳng",
        "option.rental": "Thuê hợp đồng",
        "option.equal": "Tương đương",
        # Charts
        "chart.now": "Hiện tại",
        "chart.month": "Tháng",
        "chart.purchase_cumulative": "Mua trả thẳng (Tích lũy)",
        "chart.rental_cumulative": "Thuê hợp đồng (Tích lũy)",
        # Document
        "doc.title": "BÁO GIÁ",
        "doc.quote_number": "Số báo giá",
        "doc.date": "Ngày",
        "doc.valid_until": "Hiệu lực đến",
        "doc.customer_section": "THÔNG TIN KHÁCH HÀNG",
        "doc.customer_name": "Tên khách hàng",
        "doc.company": "Công ty",
        "doc.address": "Địa chỉ",
        "doc.contact": "Liên hệ",
        "doc.number_of_stores": "Số lượng cửa hàng",
        "doc.cost_section": "CHI TIẾT CHI PHÍ",
        "doc.hardware_cost": "Chi phí phần cứng",
        "doc.software_cost": "Chi phí phần mềm (mỗi năm)",
        "doc.installation_cost": "Chi phí lắp đặt (mỗi cửa hàng)",
        "doc.setup_service": "Dịch vụ thiết lập (mỗi cửa hàng)",
        "doc.comparison_section": "SO SÁNH PHƯƠNG THỨC THANH TOÁN",
        "doc.purchase_heading": "MUA TRẢ THẲNG",
        "doc.rental_heading": "THUÊ HỢP ĐỒNG 2 NĂM",
        "doc.initial_payment": "Thanh toán ban đầu",
        "doc.year_two": "Năm thứ 2",
        "doc.total": "Tổng cộng",
        "doc.deposit": "Đặt cọc (hoàn trả)",
        "doc.monthly": "Hàng tháng",
        "doc.excl_deposit": "(không bao gồm cọc)",
        "doc.summary_section": "TÓM TẮT DÒNG TIỀN 24 THÁNG",
        "doc.cash_flow_section": "DÒNG TIỀN CHI TIẾT 24 THÁNG",
        "doc.month": "Tháng",
        "doc.now": "Hiện tại",
        "doc.amount": "Số tiền",
        "doc.cumulative": "Tích lũy",
        "doc.payment_chart_section": "BIỂU ĐỒ THANH TOÁN HÀNG THÁNG",
        "doc.cumulative_chart_section": "BIỂU ĐỒ DÒNG TIỀN TÍCH LŨY",
        "doc.terms_section": "ĐIỀU KHOẢN & ĐIỀU KIỆN",
        "doc.best_option": "Phương án tốt nhất",
        "doc.difference": "Chênh lệch",
        # Errors
        "error.export_failed": "Không thể tạo PDF. Vui lòng thử lại.",
    },
    "en": {
        "validation.required": "This field is required",
        "validation.min_value": "Value must be greater than 0",
        "option.purchase": "Direct Purchase",
        "option.rental": "Contract Rental",
        "option.equal": "Equivalent",
        "chart.now": "Now",
        "chart.month": "Month",
        "chart.purchase_cumulative": "Direct Purchase (Cumulative)",
        "chart.rental_cumulative": "Contract Rental (Cumulative)",
        "doc.title": "QUOTATION",
        "doc.quote_number": "Quote Number",
        "doc.date": "Date",
        "doc.valid_until": "Valid Until",
        "doc.customer_section": "CUSTOMER INFORMATION",
        "doc.customer_name": "Customer Name",
        "doc.company": "Company",
        "doc.address": "Address",
        "doc.contact": "Contact",
        "doc.number_of_stores": "Number of Stores",
        "doc.cost_section": "COST BREAKDOWN",
        "doc.hardware_cost": "Hardware Cost",
        "doc.software_cost": "Software Cost (per year)",
        "doc.installation_cost": "Installation Cost (per store)",
        "doc.setup_service": "Setup Service (per store)",
        "doc.comparison_section": "PAYMENT METHOD COMPARISON",
        "doc.purchase_heading": "DIRECT PURCHASE",
        "doc.rental_heading": "2-YEAR CONTRACT RENTAL",
        "doc.initial_payment": "Initial Payment",
        "doc.year_two": "Year 2",
        "doc.total": "Total",
        "doc.deposit": "Deposit (refundable)",
        "doc.monthly": "Monthly",
        "doc.excl_deposit": "(excl. deposit)",
        "doc.summary_section": "24-MONTH CASH FLOW SUMMARY",
        "doc.cash_flow_section": "DETAILED 24-MONTH CASH FLOW",
        "doc.month": "Month",
        "doc.now": "Now",
        "doc.amount": "Amount",
        "doc.cumulative": "Cumulative",
        "doc.payment_chart_section": "MONTHLY PAYMENT CHART",
        "doc.cumulative_chart_section": "CUMULATIVE CASH FLOW CHART",
        "doc.terms_section": "TERMS & CONDITIONS",
        "doc.best_option": "Best Option",
        "doc.difference": "Difference",
        "error.export_failed": "Failed to generate PDF. Please try again.",
    },
}

TERMS: Dict[str, List[str]] = {
    "vi": [
        "Thuê: Yêu cầu đặt cọc 3 tháng (hoàn trả khi kết thúc hợp đồng)",
        "Mua: Bảo hành phần cứng 1 năm",
        "Cam kết dịch vụ: Phản hồi trong 48 giờ",
        "Chi phí bổ sung có thể áp dụng cho các sự cố do khách hàng gây ra",
        "Báo giá có hiệu lực trong {validity_days} ngày",
        "Giá đã bao gồm VAT và các chi phí liên quan",
    ],
    "en": [
        "Rental: 3-month deposit required (refundable at contract end)",
        "Purchase: 1-year hardware warranty included",
        "Service commitment: 48-hour response time",
        "Additional costs may apply for customer-caused issues",
        "Quote valid for {validity_days} days from issue date",
        "All prices include VAT and related costs",
    ],
}


def normalize_locale(locale: Optional[str]) -> str:
    """Map 'en-US', 'VI', 'vi_VN' etc. to a supported locale, else the configured default"""
    if locale:
        language = locale.replace("_", "-").split("-")[0].strip().lower()
        if language in SUPPORTED_LOCALES:
            return language
    return settings.default_locale if settings.default_locale in SUPPORTED_LOCALES else FALLBACK_LOCALE


def translate(key: str, locale: Optional[str] = None) -> str:
    """Look up a message; missing keys fall back to English, then to the key itself"""
    bundle = MESSAGES[normalize_locale(locale)]
    if key in bundle:
        return bundle[key]
    return MESSAGES[FALLBACK_LOCALE].get(key, key)


def terms_and_conditions(locale: Optional[str] = None, validity_days: Optional[int] = None) -> List[str]:
    """Terms printed at the end of the quotation"""
    days = validity_days if validity_days is not None else settings.quote_validity_days
    return [term.format(validity_days=days) for term in TERMS[normalize_locale(locale)]]
