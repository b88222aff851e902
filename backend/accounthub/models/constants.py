from typing import Literal

RedemptionCodeType = Literal["single", "multiple", "batch"]
RedemptionCodeStatus = Literal["active", "expired", "exhausted", "disabled"]

MembershipStatus = Literal["active", "inactive", "expired"]
MembershipPaymentStatus = Literal["paid", "pending", "failed", "refunded"]
BillingCycle = Literal["monthly", "quarterly", "yearly"]

PaymentStatus = Literal["success", "failed", "pending", "refunded"]
PaymentMethod = Literal["alipay", "wechat", "stripe", "manual", "epay"]

Platform = Literal["android", "ios", "windows", "macos", "linux", "web", "all"]

AppConfigType = Literal["announcement", "llm_config", "api_config", "feature_flag", "custom"]
TemplateFieldType = Literal["text", "textarea", "number", "password", "date", "select", "switch"]

UNLIMITED_USES = -1
