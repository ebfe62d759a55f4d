"""taskdeck Core -- 领域模型、本地持久化与任务仓储"""
