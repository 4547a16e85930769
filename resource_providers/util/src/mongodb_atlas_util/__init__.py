"""
Shared plumbing for the MongoDB Atlas CloudFormation Resource Providers

* `atlas` - Digest-authenticated client for the Atlas Admin API
* `profile` - Resolves Atlas API keys stored as Secrets Manager profiles
* `config` - Per-invocation handler configuration
* `progress_events` - Builders for failed ProgressEvents
* `validator` - Required-field validation for resource models
* `util` - Logging helpers
"""
