"""领域层模型与异常。

包含：
- models: ConversationMessage / GenerationRequest / GenerationResult / ResolvedReply 等模型。
- exceptions: 业务异常类型定义。
"""
