"""HTTP 层：FastAPI 服务 (service)、请求模型 (schemas) 与回复行协议 (envelope)。"""
