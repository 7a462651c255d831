"""领域层模型与协议。

包含：
- models: 统一的 ConditionEntry / WeatherSnapshot / Intent 模型。
- conversation: 会话消息 Message 及只追加的 ConversationHistory。
- exceptions: 业务异常类型定义。
"""
