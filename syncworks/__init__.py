"""SyncWorks moving company back office API"""
